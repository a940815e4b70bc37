"""Assemble day-by-day review plans for a week or a 4-week cycle."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, FrozenSet, Hashable, Iterable, List, Set

from src.schedule.errors import InvalidDateRange, ensure_date, ensure_weeks
from src.schedule.models import PERIOD_MONTH, PERIOD_WEEK, WEEKDAYS, DayPlan, Item, Tier, ensure_snapshot
from src.schedule.partition import assign_monthly, assign_weekly
from src.schedule.reconcile import reconcile
from src.schedule.tiers import classify


LOGGER = logging.getLogger(__name__)

SUPPORTED_PERIODS = (PERIOD_WEEK, PERIOD_MONTH)


def plan_period(period_start: date, period_length: int, items: Iterable[Item]) -> List[DayPlan]:
    """Return one :class:`DayPlan` per day of the period starting at ``period_start``.

    ``period_length`` is either :data:`PERIOD_WEEK` or :data:`PERIOD_MONTH`.
    Daily items are checked day by day. Weekly items are reconciled and
    partitioned once per week of the period. Monthly items are only placed
    when a whole 4-week cycle is requested.
    """
    period_start = ensure_date(period_start, "period_start")
    period_length = ensure_weeks(period_length)
    if period_length not in SUPPORTED_PERIODS:
        raise InvalidDateRange(
            f"period_length must be {PERIOD_WEEK} or {PERIOD_MONTH} weeks, got {period_length}.",
            period_length,
        )
    snapshot = ensure_snapshot(items)

    days = [period_start + timedelta(days=offset) for offset in range(period_length * WEEKDAYS)]

    daily: Dict[date, Set[Hashable]] = {
        day: {item.id for item in snapshot if classify(item.enrolled_on, day) is Tier.DAILY}
        for day in days
    }

    weekly: Dict[date, Set[Hashable]] = defaultdict(set)
    for week in range(period_length):
        week_start = period_start + timedelta(weeks=week)
        week_members = reconcile(Tier.WEEKLY, week_start, PERIOD_WEEK, snapshot)
        for item_id, weekday in assign_weekly(week_members, week_start).items():
            weekly[week_start + timedelta(days=weekday)].add(item_id)

    monthly: Dict[date, Set[Hashable]] = defaultdict(set)
    if period_length == PERIOD_MONTH:
        cycle_members = reconcile(Tier.MONTHLY, period_start, PERIOD_MONTH, snapshot)
        for item_id, slot in assign_monthly(cycle_members, period_start).items():
            monthly[period_start + timedelta(days=slot.offset_days)].add(item_id)

    plans = [
        DayPlan(
            day=day,
            daily=frozenset(daily[day]),
            weekly=frozenset(weekly.get(day, ())),
            monthly=frozenset(monthly.get(day, ())),
        )
        for day in days
    ]
    LOGGER.debug(
        "Planned %d days from %s for %d items.",
        len(plans),
        period_start.isoformat(),
        len(snapshot),
    )
    return plans


def build_schedule(
    period_start: date,
    period_length: int,
    items: Iterable[Item],
) -> Dict[date, FrozenSet[Hashable]]:
    """Map each day of the period to the ids due for review on it."""
    return {plan.day: plan.items for plan in plan_period(period_start, period_length, items)}


def summarize(plans: Iterable[DayPlan]) -> str:
    """Render per-day counts as ``D: n | W: n | M: n`` lines, one block per week."""
    weeks: List[List[str]] = []
    for index, plan in enumerate(plans):
        if index % WEEKDAYS == 0:
            weeks.append([])
        weeks[-1].append(f"D: {len(plan.daily)} | W: {len(plan.weekly)} | M: {len(plan.monthly)}")
    return "\n---\n".join("\n".join(lines) for lines in weeks)
