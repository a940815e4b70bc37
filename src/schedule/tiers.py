"""Tier classification from elapsed whole weeks."""

from __future__ import annotations

from datetime import date

from src.schedule.errors import ensure_date
from src.schedule.models import Tier


WEEKLY_FROM_WEEK = 7
MONTHLY_FROM_WEEK = 35
GRADUATED_FROM_WEEK = 336

# Shortest stay, in weeks, inside each bounded tier.
TIER_SPAN_WEEKS = {
    Tier.DAILY: WEEKLY_FROM_WEEK,
    Tier.WEEKLY: MONTHLY_FROM_WEEK - WEEKLY_FROM_WEEK,
    Tier.MONTHLY: GRADUATED_FROM_WEEK - MONTHLY_FROM_WEEK,
}


def elapsed_weeks(enrolled_on: date, as_of: date) -> int:
    """Return whole weeks between enrollment and ``as_of``, rounded down."""
    enrolled_on = ensure_date(enrolled_on, "enrolled_on")
    as_of = ensure_date(as_of, "as_of")
    return (as_of - enrolled_on).days // 7


def tier_for_weeks(weeks: int) -> Tier:
    if weeks < 0:
        return Tier.PENDING
    if weeks < WEEKLY_FROM_WEEK:
        return Tier.DAILY
    if weeks < MONTHLY_FROM_WEEK:
        return Tier.WEEKLY
    if weeks < GRADUATED_FROM_WEEK:
        return Tier.MONTHLY
    return Tier.GRADUATED


def classify(enrolled_on: date, as_of: date) -> Tier:
    """Return the review tier of an item enrolled on ``enrolled_on`` as of ``as_of``."""
    return tier_for_weeks(elapsed_weeks(enrolled_on, as_of))
