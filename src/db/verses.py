"""Helpers for loading and persisting verses."""

from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import List, Tuple, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.schedule import InvalidDateRange, Item

from . import Verse


DATE_FORMAT = "%Y-%m-%d"


@dataclass(slots=True)
class VersePayload:
    """A verse reference and the day its memorization started."""

    reference: str
    enrolled_on: date

    def normalized(self) -> "VersePayload":
        """Return a payload with whitespace in the reference collapsed."""
        return VersePayload(reference=" ".join(self.reference.split()), enrolled_on=self.enrolled_on)


def parse_verse_row(enrolled_on_text: str, reference: str) -> VersePayload:
    """Build a payload from a ``YYYY-MM-DD`` date string and a reference."""
    try:
        enrolled_on = datetime.strptime(enrolled_on_text.strip(), DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidDateRange(
            f"Enrollment date {enrolled_on_text!r} for {reference!r} is not in {DATE_FORMAT} format.",
            enrolled_on_text,
        ) from exc

    payload = VersePayload(reference=reference, enrolled_on=enrolled_on).normalized()
    if not payload.reference:
        raise ValueError(f"Verse enrolled on {enrolled_on_text} has an empty reference.")
    return payload


def read_verse_csv(path: Union[str, Path]) -> List[VersePayload]:
    """Read ``enrolled_on,reference`` rows; a header row and blank lines are skipped."""
    payloads: List[VersePayload] = []
    with open(path, newline="", encoding="utf-8") as handle:
        for row in csv.reader(handle):
            if not row or not any(cell.strip() for cell in row):
                continue
            if len(row) < 2:
                raise ValueError(f"Expected 'enrolled_on,reference' but got {row!r}.")
            enrolled_on_text, reference = row[0], ",".join(row[1:])
            if enrolled_on_text.strip().lower() == "enrolled_on":
                continue
            payloads.append(parse_verse_row(enrolled_on_text, reference))
    return payloads


async def get_or_create_verse(
    session: AsyncSession,
    chat_id: int,
    payload: VersePayload,
) -> Tuple[Verse, bool]:
    """Fetch a chat's verse by reference or create it when missing."""
    normalized = payload.normalized()

    stmt = select(Verse).where(Verse.chat_id == chat_id, Verse.reference == normalized.reference)
    result = await session.execute(stmt)
    verse = result.scalars().first()
    if verse is not None:
        return verse, False

    verse = Verse(chat_id=chat_id, reference=normalized.reference, enrolled_on=normalized.enrolled_on)
    session.add(verse)
    await session.flush()
    return verse, True


async def list_verses(session: AsyncSession, chat_id: int) -> List[Verse]:
    """Return a chat's verses, oldest enrollment first."""
    stmt = select(Verse).where(Verse.chat_id == chat_id).order_by(Verse.enrolled_on, Verse.id)
    result = await session.execute(stmt)
    return list(result.scalars())


async def load_items(session: AsyncSession, chat_id: int) -> List[Item]:
    """Return the chat's verses as schedule items keyed by verse id."""
    return [Item(id=verse.id, enrolled_on=verse.enrolled_on) for verse in await list_verses(session, chat_id)]
