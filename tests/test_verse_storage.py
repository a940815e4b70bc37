from __future__ import annotations

from datetime import date

import pytest

from src.app.importer import import_verses
from src.db.verses import (
    VersePayload,
    get_or_create_verse,
    list_verses,
    load_items,
    parse_verse_row,
    read_verse_csv,
)
from src.schedule import InvalidDateRange, Item


@pytest.mark.asyncio
async def test_get_or_create_verse_is_idempotent_per_chat(session_factory) -> None:
    payload = VersePayload(reference="  John   3:16 ", enrolled_on=date(2025, 7, 6))

    async with session_factory() as session:
        async with session.begin():
            first, created_first = await get_or_create_verse(session, 11, payload)
            second, created_second = await get_or_create_verse(session, 11, payload)
            other_chat, created_other = await get_or_create_verse(session, 12, payload)

    assert created_first is True
    assert created_second is False
    assert second.id == first.id
    assert first.reference == "John 3:16"
    assert created_other is True
    assert other_chat.id != first.id


@pytest.mark.asyncio
async def test_load_items_returns_snapshot_ordered_by_enrollment(session_factory) -> None:
    async with session_factory() as session:
        async with session.begin():
            later, _ = await get_or_create_verse(session, 21, VersePayload("John 1:2", date(2025, 7, 13)))
            earlier, _ = await get_or_create_verse(session, 21, VersePayload("John 1:1", date(2025, 7, 6)))
            await get_or_create_verse(session, 22, VersePayload("Psalm 23:1", date(2025, 7, 1)))

    async with session_factory() as session:
        verses = await list_verses(session, 21)
        items = await load_items(session, 21)

    assert [verse.reference for verse in verses] == ["John 1:1", "John 1:2"]
    assert items == [
        Item(id=earlier.id, enrolled_on=date(2025, 7, 6)),
        Item(id=later.id, enrolled_on=date(2025, 7, 13)),
    ]


def test_parse_verse_row_validates_dates_and_references() -> None:
    assert parse_verse_row("2025-07-06", "John 1:1") == VersePayload("John 1:1", date(2025, 7, 6))

    with pytest.raises(InvalidDateRange) as excinfo:
        parse_verse_row("06/07/2025", "John 1:1")
    assert excinfo.value.value == "06/07/2025"

    with pytest.raises(ValueError):
        parse_verse_row("2025-07-06", "   ")


def test_read_verse_csv_skips_header_and_blank_lines(tmp_path) -> None:
    source = tmp_path / "verses.csv"
    source.write_text(
        "enrolled_on,reference\n"
        "2025-07-06,John 1:1\n"
        "\n"
        "2025-07-13,Psalm 23:1,2\n",
        encoding="utf-8",
    )

    payloads = read_verse_csv(source)

    assert payloads == [
        VersePayload("John 1:1", date(2025, 7, 6)),
        VersePayload("Psalm 23:1,2", date(2025, 7, 13)),
    ]


def test_read_verse_csv_rejects_rows_without_reference(tmp_path) -> None:
    source = tmp_path / "broken.csv"
    source.write_text("2025-07-06\n", encoding="utf-8")

    with pytest.raises(ValueError):
        read_verse_csv(source)


@pytest.mark.asyncio
async def test_import_verses_reports_created_and_existing(session_factory) -> None:
    payloads = [
        VersePayload("John 1:1", date(2025, 7, 6)),
        VersePayload("John 1:2", date(2025, 7, 13)),
    ]

    assert await import_verses(session_factory, 31, payloads) == (2, 0)
    assert await import_verses(session_factory, 31, payloads) == (0, 2)

    async with session_factory() as session:
        assert len(await list_verses(session, 31)) == 2
