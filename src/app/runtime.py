"""Bootstrap logic for running the Telegram bot."""

from __future__ import annotations

import asyncio
import logging

from src.app.settings import AppSettings
from src.bot import ReviewPlanBot, build_application
from src.db import get_session_factory, run_migrations_if_needed


LOGGER = logging.getLogger(__name__)


def configure_logging(log_level: str) -> None:
    """Set up project-wide logging configuration."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        level=log_level,
    )


def _ensure_event_loop() -> None:
    """Guarantee that an asyncio event loop exists for the current thread."""
    try:
        asyncio.get_event_loop()
    except RuntimeError:
        asyncio.set_event_loop(asyncio.new_event_loop())


def run_bot(settings: AppSettings) -> None:
    """Start the Telegram bot using the provided settings."""
    configure_logging(settings.log_level)
    print(f"{settings.app_name} is running in {settings.app_env} mode.")

    try:
        run_migrations_if_needed()
    except Exception:
        LOGGER.exception("Database migrations failed. Aborting startup.")
        raise

    bot = ReviewPlanBot(
        session_factory=get_session_factory(),
        system_start=settings.schedule_start_date,
        clock=settings.today,
    )
    application = build_application(settings.telegram_bot_token, bot)

    _ensure_event_loop()

    LOGGER.info(
        "Starting Telegram bot for %s in %s mode with cycles anchored on %s.",
        settings.app_name,
        settings.app_env,
        settings.schedule_start_date.isoformat(),
    )
    application.run_polling()
