"""Value types shared by the schedule components."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Dict, FrozenSet, Hashable, Iterable, List, NamedTuple

from src.schedule.errors import DuplicateItemId, ensure_date


WEEKDAYS = 7
SUB_WEEKS = 4
PERIOD_WEEK = 1
PERIOD_MONTH = SUB_WEEKS


class Tier(IntEnum):
    """Review frequency of an item, ordered from newest to oldest."""

    PENDING = 0
    DAILY = 1
    WEEKLY = 2
    MONTHLY = 3
    GRADUATED = 4

    @property
    def label(self) -> str:
        return self.name.lower()

    @property
    def is_scheduled(self) -> bool:
        return self in (Tier.DAILY, Tier.WEEKLY, Tier.MONTHLY)


@dataclass(frozen=True, slots=True)
class Item:
    """A memorized item identified by ``id`` and enrolled on ``enrolled_on``."""

    id: Hashable
    enrolled_on: date

    @property
    def sort_key(self) -> tuple:
        return (self.enrolled_on, self.id)


class MonthlySlot(NamedTuple):
    """Position of a monthly item inside its 4-week cycle."""

    sub_week: int
    weekday: int

    @property
    def offset_days(self) -> int:
        return self.sub_week * WEEKDAYS + self.weekday


@dataclass(frozen=True, slots=True)
class DayPlan:
    """Items due on a single day, split by the tier that put them there."""

    day: date
    daily: FrozenSet[Hashable]
    weekly: FrozenSet[Hashable]
    monthly: FrozenSet[Hashable]

    @property
    def items(self) -> FrozenSet[Hashable]:
        return self.daily | self.weekly | self.monthly


def ensure_snapshot(items: Iterable[Item]) -> List[Item]:
    """Validate a snapshot and return it as a list.

    Every item needs a real ``date`` and a unique id; a repeated id would
    leave two enrollments competing for the same slot.
    """
    seen: Dict[Hashable, Item] = {}
    snapshot: List[Item] = []
    for item in items:
        ensure_date(item.enrolled_on, f"enrolled_on of item {item.id!r}")
        previous = seen.get(item.id)
        if previous is not None:
            raise DuplicateItemId(item.id, previous.enrolled_on, item.enrolled_on)
        seen[item.id] = item
        snapshot.append(item)
    return snapshot
