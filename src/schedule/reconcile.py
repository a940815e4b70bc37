"""Tier membership over a whole period rather than a single day."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import FrozenSet, Iterable

from src.schedule.errors import InvalidDateRange, ensure_date, ensure_weeks
from src.schedule.models import Item, Tier, ensure_snapshot
from src.schedule.tiers import TIER_SPAN_WEEKS, classify


LOGGER = logging.getLogger(__name__)


def members(tier: Tier, items: Iterable[Item], as_of: date) -> FrozenSet[Item]:
    """Return the items whose tier is ``tier`` on ``as_of``."""
    return frozenset(item for item in items if classify(item.enrolled_on, as_of) is tier)


def reconcile(
    tier: Tier,
    period_start: date,
    period_length: int,
    items: Iterable[Item],
) -> FrozenSet[Item]:
    """Return every item that belongs to ``tier`` at either end of the period.

    ``period_length`` is in weeks. Items leaving the tier during the period
    are still covered for it, and items joining partway through are covered
    from its first day. Checking only the two endpoints is sound because the
    period is shorter than the time any item spends in ``tier``.
    """
    period_start = ensure_date(period_start, "period_start")
    period_length = ensure_weeks(period_length)
    span = TIER_SPAN_WEEKS.get(tier)
    if span is not None and period_length >= span:
        raise InvalidDateRange(
            f"A {period_length}-week period can skip over the {tier.label} tier ({span} weeks).",
            period_length,
        )

    snapshot = ensure_snapshot(items)
    period_end = period_start + timedelta(weeks=period_length)
    at_start = members(tier, snapshot, period_start)
    at_end = members(tier, snapshot, period_end)

    LOGGER.debug(
        "Reconciled %s tier for %s..%s: %d at start, %d at end, %d total",
        tier.label,
        period_start.isoformat(),
        period_end.isoformat(),
        len(at_start),
        len(at_end),
        len(at_start | at_end),
    )
    return at_start | at_end
