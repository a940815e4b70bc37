"""Command-line loader that seeds the verse store from a CSV file."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.app.runtime import configure_logging
from src.db import get_session_factory, run_migrations_if_needed
from src.db.verses import VersePayload, get_or_create_verse, read_verse_csv


LOGGER = logging.getLogger(__name__)


async def import_verses(
    session_factory: async_sessionmaker[AsyncSession],
    chat_id: int,
    payloads: List[VersePayload],
) -> Tuple[int, int]:
    """Store payloads for a chat in one transaction and return ``(created, existing)``."""
    created = 0
    existing = 0
    async with session_factory() as session:
        async with session.begin():
            for payload in payloads:
                _, was_created = await get_or_create_verse(session, chat_id, payload)
                if was_created:
                    created += 1
                else:
                    existing += 1
    return created, existing


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import enrolled verses from an 'enrolled_on,reference' CSV.")
    parser.add_argument("csv_path", type=Path)
    parser.add_argument("--chat-id", type=int, required=True, help="Telegram chat that owns the verses.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Entry point for ``verse-cadence-import``."""
    args = _parse_args(argv)
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    payloads = read_verse_csv(args.csv_path)
    run_migrations_if_needed()
    created, existing = asyncio.run(import_verses(get_session_factory(), args.chat_id, payloads))
    LOGGER.info(
        "Imported %s for chat %s: %d created, %d already present.",
        args.csv_path,
        args.chat_id,
        created,
        existing,
    )


if __name__ == "__main__":
    main()
