"""Review cadence core: tier classification and period schedules."""

from .builder import build_schedule, plan_period, summarize
from .cycle import cycle_start, plan_cycle, week_start
from .errors import DuplicateItemId, InvalidDateRange, ScheduleError
from .models import PERIOD_MONTH, PERIOD_WEEK, DayPlan, Item, MonthlySlot, Tier
from .partition import assign_monthly, assign_weekly
from .reconcile import reconcile
from .tiers import classify, elapsed_weeks

__all__ = [
    "DayPlan",
    "DuplicateItemId",
    "InvalidDateRange",
    "Item",
    "MonthlySlot",
    "PERIOD_MONTH",
    "PERIOD_WEEK",
    "ScheduleError",
    "Tier",
    "assign_monthly",
    "assign_weekly",
    "build_schedule",
    "classify",
    "cycle_start",
    "elapsed_weeks",
    "plan_cycle",
    "plan_period",
    "reconcile",
    "summarize",
    "week_start",
]
