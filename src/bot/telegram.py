"""Telegram application wiring for Verse Cadence."""

from telegram.ext import Application, ApplicationBuilder, CommandHandler

from .planner import ReviewPlanBot


def build_application(bot_token: str, bot: ReviewPlanBot) -> Application:
    """Configure the Telegram application instance."""
    application = ApplicationBuilder().token(bot_token).build()
    application.add_handler(CommandHandler("start", bot.handle_start))
    application.add_handler(CommandHandler("today", bot.handle_today))
    application.add_handler(CommandHandler("week", bot.handle_week))
    application.add_handler(CommandHandler("month", bot.handle_month))
    application.add_handler(CommandHandler("status", bot.handle_status))
    return application
