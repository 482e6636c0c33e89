"""
main.py
-------
Entry point for the Expense Tracker Telegram bot.

Responsibilities:
    - Initialize the database connection pool and schema.
    - Configure and start the Telegram bot with all handlers.
    - Keep per-user state (session, filters, edit buffer) in a
      PicklePersistence file so it survives restarts.
"""

from telegram import BotCommand
from telegram.ext import (
    Application,
    CommandHandler,
    PicklePersistence,
)

from config import PERSISTENCE_FILE, TELEGRAM_BOT_TOKEN
from db.connection import init_pool, close_pool
from db.init_db import create_tables
from handlers.budget_handler import budget_command
from handlers.common import error_handler
from handlers.start_handler import (
    start_command,
    help_command,
    register_command,
    login_command,
    logout_command,
    whoami_command,
)
from handlers.transaction_handler import (
    add_command,
    list_command,
    summary_command,
    search_command,
    filter_command,
    clear_command,
    sort_command,
    edit_command,
    set_command,
    save_command,
    cancel_command,
    delete_command,
)
from utils.logger import get_logger

logger = get_logger(__name__)

COMMANDS = [
    ("start", start_command, "🚀 Start the bot"),
    ("help", help_command, "📖 Show help"),
    ("register", register_command, "🆕 Create an account"),
    ("login", login_command, "🔑 Log in"),
    ("logout", logout_command, "🚪 Log out"),
    ("whoami", whoami_command, "👤 Logged-in account"),
    ("add", add_command, "➕ Add a transaction"),
    ("list", list_command, "📜 Transaction history"),
    ("summary", summary_command, "📊 Totals and breakdown"),
    ("search", search_command, "🔍 Search transactions"),
    ("filter", filter_command, "🏷️ Toggle a category filter"),
    ("clear", clear_command, "🧹 Clear filters"),
    ("sort", sort_command, "↕️ Sort transactions"),
    ("edit", edit_command, "✏️ Edit a transaction"),
    ("set", set_command, "📝 Change a field of the edit"),
    ("save", save_command, "✅ Save the edit"),
    ("cancel", cancel_command, "↩️ Discard the edit"),
    ("delete", delete_command, "🗑️ Delete a transaction"),
    ("budget", budget_command, "💰 Monthly budgets"),
]


async def set_bot_commands(application: Application) -> None:
    """Register bot commands menu in Telegram on startup."""
    await application.bot.set_my_commands(
        [BotCommand(name, description) for name, _, description in COMMANDS]
    )
    logger.info("Bot commands menu registered successfully.")


def build_application(token: str = TELEGRAM_BOT_TOKEN) -> Application:
    """Create the Telegram application with persistence and all handlers."""
    persistence = PicklePersistence(filepath=PERSISTENCE_FILE)
    app = (
        Application.builder()
        .token(token)
        .persistence(persistence)
        .post_init(set_bot_commands)
        .build()
    )
    for name, callback, _ in COMMANDS:
        app.add_handler(CommandHandler(name, callback))
    app.add_error_handler(error_handler)
    return app


def main() -> None:
    """Initialize and run the bot."""

    # ── 1. Database setup ─────────────────────────────────
    logger.info("Initializing database...")
    init_pool()
    create_tables()

    # ── 2. Build the Telegram application ─────────────────
    logger.info("Starting Telegram bot...")
    app = build_application()

    # ── 3. Start polling ──────────────────────────────────
    logger.info("Expense Tracker is running! Press Ctrl+C to stop.")
    app.run_polling(drop_pending_updates=True, allowed_updates=["message"])

    # ── 4. Cleanup on shutdown ────────────────────────────
    close_pool()
    logger.info("Expense Tracker stopped.")


if __name__ == "__main__":
    main()
