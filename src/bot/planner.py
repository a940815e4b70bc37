"""Telegram handlers that render review plans for a chat's verses."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from html import escape
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from telegram import Update
from telegram.constants import ParseMode
from telegram.ext import ContextTypes

from src.db import Verse
from src.db.verses import list_verses
from src.schedule import DayPlan, Item, ScheduleError, Tier, classify, cycle_start, plan_cycle, summarize, week_start
from src.schedule.tiers import elapsed_weeks


LOGGER = logging.getLogger(__name__)

Clock = Callable[[], date]
Renderer = Callable[[List[Verse], date], str]

_TIER_HEADINGS = (
    ("daily", "Daily"),
    ("weekly", "Weekly"),
    ("monthly", "Monthly"),
)


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class ReviewPlanBot:
    """Answers plan commands by running the schedule core on the chat's verses."""

    def __init__(
        self,
        session_factory: Optional[async_sessionmaker[AsyncSession]],
        system_start: date,
        clock: Optional[Clock] = None,
    ) -> None:
        self._session_factory = session_factory
        self._system_start = system_start
        self._clock = clock or _utc_today

    async def _load_verses(self, chat_id: int) -> List[Verse]:
        async with self._session_factory() as session:
            return await list_verses(session, chat_id)

    @staticmethod
    def _items(verses: Iterable[Verse]) -> List[Item]:
        return [Item(id=verse.id, enrolled_on=verse.enrolled_on) for verse in verses]

    async def _reply_with(self, update: Update, render: Renderer) -> None:
        """Load the chat's verses, render them for today and send the result."""
        message = update.message
        if not message:
            return

        chat = update.effective_chat
        if chat is None:
            return

        if self._session_factory is None:
            await message.reply_text("Verse storage is not available in this configuration.")
            return

        verses = await self._load_verses(chat.id)
        if not verses:
            await message.reply_text("No verses are enrolled for this chat yet.")
            return

        today = self._clock()
        try:
            text = render(verses, today)
        except ScheduleError as exc:
            LOGGER.warning("Could not build a plan for chat %s on %s: %s", chat.id, today, exc)
            await message.reply_text(f"Could not build a plan: {exc}")
            return

        await message.reply_text(text, parse_mode=ParseMode.HTML)

    async def handle_start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Explain the review cadence and the available commands."""
        if not update.message:
            return

        greeting = (
            "<b>Verse Cadence</b>\n"
            "New verses are reviewed every day for 7 weeks, then once a week until week 35, "
            "then once every 4 weeks until week 336.\n\n"
            "/today - verses to review today\n"
            "/week - this week's plan\n"
            "/month - load for the current 4-week cycle\n"
            "/status - the review tier of every verse"
        )
        await update.message.reply_text(greeting, parse_mode=ParseMode.HTML)

    async def handle_today(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._reply_with(update, self.render_today)

    async def handle_week(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._reply_with(update, self.render_week)

    async def handle_month(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._reply_with(update, self.render_month)

    async def handle_status(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self._reply_with(update, self.render_status)

    def _cycle_plans(self, verses: List[Verse], today: date) -> Tuple[List[DayPlan], Dict[Hashable, str]]:
        references = {verse.id: verse.reference for verse in verses}
        return plan_cycle(self._system_start, today, self._items(verses)), references

    def render_today(self, verses: List[Verse], today: date) -> str:
        plans, references = self._cycle_plans(verses, today)
        plan = next(plan for plan in plans if plan.day == today)
        return self._format_day(plan, references, title=f"Today, {self._format_date(today)}")

    def render_week(self, verses: List[Verse], today: date) -> str:
        plans, references = self._cycle_plans(verses, today)
        first_day = week_start(self._system_start, today)
        days = [plan for plan in plans if 0 <= (plan.day - first_day).days < 7]
        sections = [f"<b>Week of {self._format_date(first_day)}</b>"]
        sections.extend(self._format_day(plan, references) for plan in days)
        return "\n\n".join(sections)

    def render_month(self, verses: List[Verse], today: date) -> str:
        plans, _ = self._cycle_plans(verses, today)
        first_day = cycle_start(self._system_start, today)
        return "\n".join(
            [
                f"<b>Cycle starting {self._format_date(first_day)}</b>",
                f"<pre>{escape(summarize(plans))}</pre>",
            ]
        )

    def render_status(self, verses: List[Verse], today: date) -> str:
        lines = [f"<b>Verse status on {self._format_date(today)}</b>"]
        for verse in verses:
            tier = classify(verse.enrolled_on, today)
            weeks = max(0, elapsed_weeks(verse.enrolled_on, today))
            detail = "starts later" if tier is Tier.PENDING else f"week {weeks}"
            lines.append(f"{escape(verse.reference)}: <i>{tier.label}</i> ({detail})")
        return "\n".join(lines)

    @staticmethod
    def _format_date(day: date) -> str:
        return day.strftime("%a %d %b %Y")

    def _format_day(self, plan: DayPlan, references: Dict[Hashable, str], title: Optional[str] = None) -> str:
        lines = [f"<b>{escape(title or self._format_date(plan.day))}</b>"]
        if not plan.items:
            lines.append("<i>Nothing to review.</i>")
            return "\n".join(lines)

        for attribute, heading in _TIER_HEADINGS:
            ids = getattr(plan, attribute)
            if not ids:
                continue
            names = sorted(escape(references.get(item_id, str(item_id))) for item_id in ids)
            lines.append(f"<i>{heading}:</i> " + ", ".join(names))
        return "\n".join(lines)
