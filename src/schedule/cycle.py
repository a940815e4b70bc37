"""Week and 4-week cycle boundaries anchored on the system start date."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List

from src.schedule.builder import plan_period
from src.schedule.errors import InvalidDateRange, ensure_date
from src.schedule.models import PERIOD_MONTH, WEEKDAYS, DayPlan, Item


def _period_anchor(system_start: date, on: date, length_days: int) -> date:
    system_start = ensure_date(system_start, "system_start")
    on = ensure_date(on, "on")
    if on < system_start:
        raise InvalidDateRange(
            f"{on.isoformat()} is before the schedule start {system_start.isoformat()}.",
            on,
        )
    elapsed = (on - system_start).days
    return system_start + timedelta(days=elapsed - elapsed % length_days)


def week_start(system_start: date, on: date) -> date:
    """First day of the week containing ``on``."""
    return _period_anchor(system_start, on, WEEKDAYS)


def cycle_start(system_start: date, on: date) -> date:
    """First day of the 4-week cycle containing ``on``."""
    return _period_anchor(system_start, on, PERIOD_MONTH * WEEKDAYS)


def plan_cycle(system_start: date, on: date, items: Iterable[Item]) -> List[DayPlan]:
    """Plan the whole 4-week cycle that contains ``on``."""
    return plan_period(cycle_start(system_start, on), PERIOD_MONTH, items)
