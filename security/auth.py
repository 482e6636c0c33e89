"""
security/auth.py
-----------------
Authentication middleware for the Telegram bot.
Blocks any command from a chat user without a valid session.
"""

from functools import wraps
from typing import Callable

from telegram import Update
from telegram.ext import ContextTypes

from security.session import SessionStore
from utils.logger import get_logger

logger = get_logger(__name__)


def login_required(func: Callable):
    """
    Decorator that restricts a handler to logged-in users.

    Usage:
        @login_required
        async def my_handler(update, context, session):
            ...

    Behavior:
        - Reads the signed session from ``context.user_data``.
        - If it is missing or invalid, asks the user to log in and stops.
        - Otherwise calls the handler with the Session as third argument.
    """
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE, *args, **kwargs):
        user = update.effective_user
        if not user:
            return

        session = SessionStore(context.user_data).get()
        if session is None:
            logger.info(f"Rejected {func.__name__} from unauthenticated chat user {user.id}")
            await update.message.reply_text(
                "🔒 Please log in first: /login <email> <password>\n"
                "No account yet? /register <email> <password> <name>"
            )
            return

        return await func(update, context, session, *args, **kwargs)

    return wrapper
