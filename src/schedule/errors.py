"""Errors raised by the review schedule core."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Hashable


class ScheduleError(ValueError):
    """Base class for invalid input handed to the schedule core."""


class InvalidDateRange(ScheduleError):
    """A date or period bound is malformed."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class DuplicateItemId(ScheduleError):
    """Two items in one snapshot share an id."""

    def __init__(self, item_id: Hashable, first: date, second: date) -> None:
        super().__init__(
            f"Item id {item_id!r} appears more than once (enrolled {first.isoformat()} and {second.isoformat()})."
        )
        self.item_id = item_id
        self.enrollments = (first, second)


def ensure_date(value: Any, name: str) -> date:
    """Return ``value`` unchanged when it is a plain ``date``."""
    if isinstance(value, datetime) or not isinstance(value, date):
        raise InvalidDateRange(f"{name} must be a datetime.date, got {value!r}.", value)
    return value


def ensure_weeks(value: Any, name: str = "period_length") -> int:
    """Return ``value`` when it is a positive whole number of weeks."""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidDateRange(f"{name} must be a positive number of weeks, got {value!r}.", value)
    return value
