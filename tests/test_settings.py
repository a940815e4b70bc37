from __future__ import annotations

from collections import deque
from datetime import date
from typing import List, Tuple

import pytest

from src.app.settings import AppSettings
from src.db import run_migrations_if_needed


@pytest.fixture
def base_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    monkeypatch.setenv("TELEGRAM_BOT_TOKEN", "123456:TEST-TOKEN")
    monkeypatch.setenv("SCHEDULE_START_DATE", "2025-07-06")
    monkeypatch.delenv("SCHEDULE_TIMEZONE", raising=False)
    monkeypatch.delenv("APP_NAME", raising=False)
    return monkeypatch


def test_from_env_reads_schedule_anchor(base_env: pytest.MonkeyPatch) -> None:
    settings = AppSettings.from_env()

    assert settings.app_name == "Verse Cadence"
    assert settings.schedule_start_date == date(2025, 7, 6)
    assert settings.schedule_timezone == "UTC"
    assert isinstance(settings.today(), date)


@pytest.mark.parametrize(
    ("variable", "value"),
    [
        ("TELEGRAM_BOT_TOKEN", ""),
        ("SCHEDULE_START_DATE", ""),
        ("SCHEDULE_START_DATE", "06.07.2025"),
        ("SCHEDULE_TIMEZONE", "Nowhere/Atlantis"),
    ],
)
def test_from_env_rejects_invalid_values(base_env: pytest.MonkeyPatch, variable: str, value: str) -> None:
    base_env.setenv(variable, value)

    with pytest.raises(RuntimeError):
        AppSettings.from_env()


def test_run_migrations_if_needed_invokes_upgrade(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[Tuple[object, str]] = []

    def fake_upgrade(config: object, target: str) -> None:
        calls.append((config, target))

    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("RUN_MIGRATIONS_ON_STARTUP", "true")
    monkeypatch.setattr("src.db.command.upgrade", fake_upgrade)

    run_migrations_if_needed()

    assert calls and calls[0][1] == "head"


def test_run_migrations_if_needed_skips_when_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("RUN_MIGRATIONS_ON_STARTUP", "false")

    calls: deque[str] = deque()

    def fake_upgrade(_: object, target: str) -> None:
        calls.append(target)

    monkeypatch.setattr("src.db.command.upgrade", fake_upgrade)

    run_migrations_if_needed()

    assert not calls
