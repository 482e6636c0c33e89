"""
handlers/start_handler.py
--------------------------
Handles /start, /help and the account commands:
/register, /login, /logout and /whoami.
"""

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from config import CATEGORIES
from handlers.common import get_dashboard, reports_errors, reset_user_state
from models.session import Session
from security.auth import login_required
from security.session import SessionStore
from services.auth_service import AuthService
from services.budget_service import BudgetService
from services.transaction_service import TransactionService
from utils.formatting import render_summary
from utils.logger import get_logger

logger = get_logger(__name__)
auth_service = AuthService()
transaction_service = TransactionService()
budget_service = BudgetService()

HELP_TEXT = f"""
🤖 *Expense Tracker*
Manage your finances with ease 💰

*👤 Account:*
/register <email> <password> <name> - create an account
/login <email> <password> - log in
/logout - log out
/whoami - show the logged-in account

*📝 Transactions:*
/add <expense|income> <amount> <category> <YYYY-MM-DD|today> <title>
/list - transaction history
/summary - income, expense, balance and category breakdown
/edit <id> - start editing a transaction
/set <field> <value> - change title, amount, category, type or date
/save - save the edit · /cancel - discard it
/delete <id> - delete a transaction

*🔍 Search & Filter:*
/search <text> - by title, category or amount (empty clears)
/filter <category> - toggle a category filter
/sort <date|amount|title> [asc|desc]
/clear - clear search and category filters

*💰 Budgets:*
/budget - monthly budget progress
/budget set <category> <limit>
/budget delete <category>

*Categories:* {", ".join(CATEGORIES)}
"""


async def _forget_message(update: Update) -> None:
    """Delete a message that carried a password."""
    try:
        await update.message.delete()
    except TelegramError as e:
        logger.warning(f"Could not delete credential message: {e}")


async def _start_session(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    SessionStore(context.user_data).set(session)
    reset_user_state(context)
    dashboard = get_dashboard(context)
    dashboard.refresh(transaction_service, budget_service, session.id)
    await update.effective_chat.send_message(
        f"👋 Welcome, {session.name}!\n\n{render_summary(dashboard.summary())}\n\n"
        f"Type /help to see all commands."
    )


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /start command - show welcome message."""
    session = SessionStore(context.user_data).get()
    if session:
        text = f"Welcome back, {session.name}! Type /list to see your transactions."
    else:
        text = (
            "Welcome to Expense Tracker! 👋\n"
            "Log in with /login <email> <password>\n"
            "or create an account with /register <email> <password> <name>."
        )
    await update.message.reply_text(text + "\n\nType /help to show all commands.")


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /help command - show all available commands."""
    await update.message.reply_text(HELP_TEXT, parse_mode="Markdown")


@reports_errors
async def register_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """
    Handle /register <email> <password> <name...>.
    The message is deleted because it contains the password.
    """
    args = context.args or []
    await _forget_message(update)
    if len(args) < 3:
        await update.effective_chat.send_message("⚠️ Usage: /register <email> <password> <name>")
        return

    email, password, name = args[0], args[1], " ".join(args[2:])
    session = auth_service.register(name, email, password)
    logger.info(f"Chat user {update.effective_user.id} registered as user #{session.id}")
    await _start_session(update, context, session)


@reports_errors
async def login_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /login <email> <password>."""
    args = context.args or []
    await _forget_message(update)
    if len(args) < 2:
        await update.effective_chat.send_message("⚠️ Usage: /login <email> <password>")
        return

    session = auth_service.login(args[0], args[1])
    await _start_session(update, context, session)


async def logout_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    """Handle /logout - destroy the session and the cached dashboard."""
    store = SessionStore(context.user_data)
    if not store.is_authenticated():
        await update.message.reply_text("You are not logged in.")
        return
    store.clear()
    reset_user_state(context)
    await update.message.reply_text("👋 Logged out.")


@login_required
async def whoami_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """Handle /whoami - show the logged-in account."""
    await update.message.reply_text(f"[{session.initials}] {session.name}\n📧 {session.email}")
