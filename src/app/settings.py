"""Configuration helpers for the Verse Cadence runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


DEFAULT_TIMEZONE = "UTC"
START_DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class AppSettings:
    """Strongly typed application settings loaded from environment variables."""

    app_name: str
    app_env: str
    log_level: str
    telegram_bot_token: str
    schedule_start_date: date
    schedule_timezone: str

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.schedule_timezone)

    def today(self) -> date:
        """Return the current date in the schedule's timezone."""
        return datetime.now(self.tzinfo).date()

    @classmethod
    def from_env(cls) -> AppSettings:
        """Construct settings directly from environment variables."""
        app_name = os.getenv("APP_NAME", "Verse Cadence")
        app_env = os.getenv("APP_ENV", "development")
        log_level = os.getenv("LOG_LEVEL", "INFO")
        telegram_bot_token = os.getenv("TELEGRAM_BOT_TOKEN")
        raw_start_date = os.getenv("SCHEDULE_START_DATE")
        schedule_timezone = os.getenv("SCHEDULE_TIMEZONE", DEFAULT_TIMEZONE)

        if not telegram_bot_token:
            raise RuntimeError(
                "TELEGRAM_BOT_TOKEN environment variable is required to start the Telegram bot."
            )

        if not raw_start_date:
            raise RuntimeError("SCHEDULE_START_DATE environment variable is required to anchor review cycles.")

        try:
            schedule_start_date = datetime.strptime(raw_start_date, START_DATE_FORMAT).date()
        except ValueError as exc:
            raise RuntimeError("SCHEDULE_START_DATE must use the YYYY-MM-DD format.") from exc

        try:
            ZoneInfo(schedule_timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise RuntimeError(f"SCHEDULE_TIMEZONE {schedule_timezone!r} is not a known timezone.") from exc

        return cls(
            app_name=app_name,
            app_env=app_env,
            log_level=log_level,
            telegram_bot_token=telegram_bot_token,
            schedule_start_date=schedule_start_date,
            schedule_timezone=schedule_timezone,
        )
