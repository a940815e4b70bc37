from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.schedule import InvalidDateRange, Tier, classify, elapsed_weeks


ENROLLED = date(2025, 7, 6)


@pytest.mark.parametrize(
    ("days", "expected"),
    [
        (-8, Tier.PENDING),
        (-1, Tier.PENDING),
        (0, Tier.DAILY),
        (48, Tier.DAILY),
        (49, Tier.WEEKLY),
        (244, Tier.WEEKLY),
        (245, Tier.MONTHLY),
        (2351, Tier.MONTHLY),
        (2352, Tier.GRADUATED),
        (5000, Tier.GRADUATED),
    ],
)
def test_classify_uses_closed_lower_bounds(days: int, expected: Tier) -> None:
    assert classify(ENROLLED, ENROLLED + timedelta(days=days)) is expected


def test_partial_weeks_do_not_advance_the_tier() -> None:
    assert classify(ENROLLED, ENROLLED + timedelta(days=48)) is Tier.DAILY  # 6.9 weeks
    assert classify(ENROLLED, ENROLLED + timedelta(days=50)) is Tier.WEEKLY  # 7.1 weeks


def test_tier_boundaries_in_whole_weeks() -> None:
    assert classify(ENROLLED, ENROLLED + timedelta(weeks=7)) is Tier.WEEKLY
    assert classify(ENROLLED, ENROLLED + timedelta(weeks=35)) is Tier.MONTHLY
    assert classify(ENROLLED, ENROLLED + timedelta(weeks=336)) is Tier.GRADUATED


def test_classify_never_regresses_as_time_passes() -> None:
    previous = Tier.PENDING
    for offset in range(-30, 2400):
        tier = classify(ENROLLED, ENROLLED + timedelta(days=offset))
        assert tier >= previous
        previous = tier


def test_tiers_are_totally_ordered() -> None:
    assert Tier.PENDING < Tier.DAILY < Tier.WEEKLY < Tier.MONTHLY < Tier.GRADUATED
    assert [tier.label for tier in Tier] == ["pending", "daily", "weekly", "monthly", "graduated"]
    assert Tier.MONTHLY.is_scheduled
    assert not Tier.GRADUATED.is_scheduled
    assert not Tier.PENDING.is_scheduled


def test_elapsed_weeks_floors_negative_spans() -> None:
    assert elapsed_weeks(ENROLLED, ENROLLED) == 0
    assert elapsed_weeks(ENROLLED, ENROLLED + timedelta(days=13)) == 1
    assert elapsed_weeks(ENROLLED, ENROLLED - timedelta(days=1)) == -1


@pytest.mark.parametrize(
    ("enrolled_on", "as_of"),
    [
        ("2025-07-06", date(2025, 8, 1)),
        (ENROLLED, None),
        (datetime(2025, 7, 6, 12, 0), date(2025, 8, 1)),
    ],
)
def test_classify_rejects_values_that_are_not_dates(enrolled_on, as_of) -> None:
    with pytest.raises(InvalidDateRange) as excinfo:
        classify(enrolled_on, as_of)

    assert excinfo.value.value in (enrolled_on, as_of)
