"""
handlers/common.py
------------------
Helpers shared by all handlers: the single error channel and access to
the per-user state kept in ``context.user_data``.
"""

from functools import wraps
from typing import Callable

from telegram import Update
from telegram.ext import ContextTypes

from errors import TrackerError
from services.dashboard_service import DashboardState
from services.transaction_service import EditSession
from utils.logger import get_logger

logger = get_logger(__name__)

DASHBOARD_KEY = "dashboard"
EDIT_KEY = "edit"


def reports_errors(func: Callable):
    """
    Decorator that turns any TrackerError into a "⚠️ <message>" reply.

    Every handler reports validation, not-found and database failures
    this way; unexpected exceptions go to the application error handler.
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        try:
            return await func(update, context, *args, **kwargs)
        except TrackerError as e:
            logger.info(f"{func.__name__}: {type(e).__name__}: {e}")
            await update.effective_chat.send_message(f"⚠️ {e}")

    return wrapper


def get_dashboard(context: ContextTypes.DEFAULT_TYPE) -> DashboardState:
    if DASHBOARD_KEY not in context.user_data:
        context.user_data[DASHBOARD_KEY] = DashboardState()
    return context.user_data[DASHBOARD_KEY]


def get_edit_session(context: ContextTypes.DEFAULT_TYPE) -> EditSession:
    if EDIT_KEY not in context.user_data:
        context.user_data[EDIT_KEY] = EditSession()
    return context.user_data[EDIT_KEY]


def reset_user_state(context: ContextTypes.DEFAULT_TYPE) -> None:
    """Drop the dashboard and any open edit (on login and logout)."""
    context.user_data.pop(DASHBOARD_KEY, None)
    context.user_data.pop(EDIT_KEY, None)


async def error_handler(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Application-wide handler for exceptions that escaped a handler."""
    logger.error("Unhandled error while processing an update", exc_info=context.error)
    if isinstance(update, Update) and update.effective_message:
        await update.effective_message.reply_text("⚠️ Something went wrong. Please try again.")
