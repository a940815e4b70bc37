"""Stable least-loaded partitioning of tier members into review slots."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Hashable, Iterable, List, Sequence

from src.schedule.errors import ensure_date
from src.schedule.models import SUB_WEEKS, WEEKDAYS, Item, MonthlySlot, ensure_snapshot


LOGGER = logging.getLogger(__name__)


def balance(items: Sequence[Item], bucket_count: int) -> List[List[Item]]:
    """Spread ``items`` over ``bucket_count`` buckets, least-populated first.

    Items are walked in ``(enrolled_on, id)`` order and each one goes to the
    smallest bucket, lowest index on ties. Bucket sizes therefore never differ
    by more than one, the same input always yields the same buckets, and an
    item that sorts after every existing one only touches the bucket it lands in.
    """
    buckets: List[List[Item]] = [[] for _ in range(bucket_count)]
    for item in sorted(items, key=lambda entry: entry.sort_key):
        target = min(range(bucket_count), key=lambda index: (len(buckets[index]), index))
        buckets[target].append(item)
    return buckets


def assign_weekly(items: Iterable[Item], period_start: date) -> Dict[Hashable, int]:
    """Pin each weekly-tier item to a weekday offset (0..6) of the week at ``period_start``."""
    period_start = ensure_date(period_start, "period_start")
    snapshot = ensure_snapshot(items)

    assignment: Dict[Hashable, int] = {}
    buckets = balance(snapshot, WEEKDAYS)
    for weekday, bucket in enumerate(buckets):
        for item in bucket:
            assignment[item.id] = weekday

    LOGGER.debug(
        "Weekly assignment for %s: %s",
        period_start.isoformat(),
        [len(bucket) for bucket in buckets],
    )
    return assignment


def assign_monthly(items: Iterable[Item], period_start: date) -> Dict[Hashable, MonthlySlot]:
    """Pin each monthly-tier item to one ``(sub_week, weekday)`` of the cycle at ``period_start``."""
    period_start = ensure_date(period_start, "period_start")
    snapshot = ensure_snapshot(items)

    assignment: Dict[Hashable, MonthlySlot] = {}
    for sub_week, week_bucket in enumerate(balance(snapshot, SUB_WEEKS)):
        for weekday, day_bucket in enumerate(balance(week_bucket, WEEKDAYS)):
            for item in day_bucket:
                assignment[item.id] = MonthlySlot(sub_week, weekday)

    LOGGER.debug("Monthly assignment for %s: %d items", period_start.isoformat(), len(assignment))
    return assignment
