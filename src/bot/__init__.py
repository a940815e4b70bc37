"""Telegram components for Verse Cadence."""

from .planner import ReviewPlanBot
from .telegram import build_application

__all__ = ["ReviewPlanBot", "build_application"]
