"""
handlers/transaction_handler.py
-------------------------------
Handles transaction commands: add, list, search/filter/sort, summary,
the edit workflow (/edit, /set, /save, /cancel) and delete.
Delegates all logic to TransactionService and the dashboard state.
"""

from telegram import Update
from telegram.ext import ContextTypes

from config import CATEGORIES
from handlers.common import get_dashboard, get_edit_session, reports_errors
from models.filters import SORT_FIELDS, SORT_ORDERS
from models.session import Session
from security.auth import login_required
from services.budget_service import BudgetService
from services.dashboard_service import DashboardState
from services.transaction_service import TransactionService, parse_category
from utils.formatting import money, render_history, render_summary, render_transaction
from utils.logger import get_logger

logger = get_logger(__name__)
transaction_service = TransactionService()
budget_service = BudgetService()

ADD_USAGE = (
    "📝 *Add Transaction*\n\n"
    "*Format:* `/add <expense|income> <amount> <category> <YYYY-MM-DD|today> <title>`\n\n"
    "*Examples:*\n"
    "• `/add expense 250 Food today Grocery Run`\n"
    "• `/add income 50000 Other 2024-01-01 Salary`"
)


def _loaded_dashboard(context: ContextTypes.DEFAULT_TYPE, session: Session,
                      refresh: bool = False) -> DashboardState:
    """
    The user's dashboard. Fetched from the database on first use, and
    again whenever ``refresh`` is set (the full-history views), so a
    snapshot restored from persistence or changed from another chat
    never stays stale.
    """
    dashboard = get_dashboard(context)
    if refresh or dashboard.loading:
        dashboard.refresh(transaction_service, budget_service, session.id)
    return dashboard


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


# ── CREATE ────────────────────────────────────────────────

@login_required
@reports_errors
async def add_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """
    Handle /add - record a new transaction.

    Usage: /add <expense|income> <amount> <category> <date> <title...>
    """
    args = context.args or []
    if len(args) < 5:
        await update.message.reply_text(ADD_USAGE, parse_mode="Markdown")
        return

    tx_type, amount, category, tx_date = args[:4]
    title = " ".join(args[4:])
    saved = transaction_service.add(session.id, title, amount, category, tx_type, tx_date)

    dashboard = get_dashboard(context)
    dashboard.refresh_transactions(transaction_service, session.id)

    emoji = "💸" if saved.is_expense() else "💰"
    await update.message.reply_text(
        f"{emoji} Recorded {saved.type}:\n"
        f"  📌 {saved.title}\n"
        f"  📂 Category: {saved.category}\n"
        f"  💶 Amount: {money(saved.amount)}\n"
        f"  📅 Date: {saved.date.isoformat()}\n"
        f"  🔖 ID: #{saved.id}"
    )


# ── READ ──────────────────────────────────────────────────

@login_required
@reports_errors
async def list_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """Handle /list - show the filtered and sorted transaction history."""
    dashboard = _loaded_dashboard(context, session, refresh=True)
    await update.message.reply_text(
        render_history(dashboard.view(), dashboard.filters, dashboard.loading)
    )


@login_required
@reports_errors
async def summary_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """Handle /summary - totals and category breakdown of the current view."""
    dashboard = _loaded_dashboard(context, session, refresh=True)
    await update.message.reply_text(render_summary(dashboard.summary()))


@login_required
@reports_errors
async def search_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """
    Handle /search - filter by title, category or amount.
    Usage: /search groc   (no text clears the search)
    """
    dashboard = _loaded_dashboard(context, session)
    dashboard.filters.search = " ".join(context.args or []).strip()
    await update.message.reply_text(
        render_history(dashboard.view(), dashboard.filters, dashboard.loading)
    )


@login_required
@reports_errors
async def filter_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """
    Handle /filter - toggle one or more categories in the filter.
    Usage: /filter Food Travel
    """
    dashboard = _loaded_dashboard(context, session)
    if not context.args:
        await update.message.reply_text(
            "🏷️ Usage: /filter <category> [category...]\n"
            f"Categories: {', '.join(CATEGORIES)}"
        )
        return

    for raw in context.args:
        dashboard.filters.toggle_category(parse_category(raw))
    await update.message.reply_text(
        render_history(dashboard.view(), dashboard.filters, dashboard.loading)
    )


@login_required
@reports_errors
async def clear_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """Handle /clear - drop the search text and category filters."""
    dashboard = _loaded_dashboard(context, session)
    dashboard.filters.clear()
    await update.message.reply_text(
        render_history(dashboard.view(), dashboard.filters, dashboard.loading)
    )


@login_required
@reports_errors
async def sort_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """
    Handle /sort <field> [order].

    Examples:
        /sort amount desc
        /sort title        (ascending by default for titles)
    """
    args = [a.lower() for a in (context.args or [])]
    if not args or args[0] not in SORT_FIELDS or (len(args) > 1 and args[1] not in SORT_ORDERS):
        await update.message.reply_text("⚠️ Usage: /sort <date|amount|title> [asc|desc]")
        return

    field = args[0]
    order = args[1] if len(args) > 1 else ("asc" if field == "title" else "desc")
    dashboard = _loaded_dashboard(context, session)
    dashboard.filters.sort_field = field
    dashboard.filters.sort_order = order
    await update.message.reply_text(
        render_history(dashboard.view(), dashboard.filters, dashboard.loading)
    )


# ── UPDATE ────────────────────────────────────────────────

@login_required
@reports_errors
async def edit_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """
    Handle /edit <id> - start editing a transaction.
    Copies its fields into a scratch buffer that /set changes.
    """
    transaction_id = _parse_id(context.args or [])
    if transaction_id is None:
        await update.message.reply_text("⚠️ Usage: /edit <id>\nExample: /edit 5")
        return

    transaction = transaction_service.get(transaction_id, session.id)
    if transaction is None:
        await update.message.reply_text(f"⚠️ Transaction #{transaction_id} not found.")
        return

    edit = get_edit_session(context)
    edit.begin(transaction)
    await update.message.reply_text(
        f"✏️ Editing {render_transaction(transaction)}\n\n"
        "Change a field with /set <title|amount|category|type|date> <value>\n"
        "Then /save or /cancel."
    )


@login_required
@reports_errors
async def set_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """Handle /set <field> <value> - change a field of the transaction being edited."""
    args = context.args or []
    if len(args) < 2:
        await update.message.reply_text("⚠️ Usage: /set <title|amount|category|type|date> <value>")
        return

    edit = get_edit_session(context)
    edit.change(args[0].lower(), " ".join(args[1:]))
    pending = "\n".join(f"  {k}: {v}" for k, v in edit.scratch.items())
    await update.message.reply_text(f"✏️ Pending changes to #{edit.editing_id}:\n{pending}\n\n/save or /cancel")


@login_required
@reports_errors
async def save_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """Handle /save - write the edited fields."""
    edit = get_edit_session(context)
    transaction_id = edit.save(transaction_service, session.id)
    get_dashboard(context).refresh_transactions(transaction_service, session.id)
    await update.message.reply_text(f"✅ Transaction #{transaction_id} updated.")


@login_required
async def cancel_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """Handle /cancel - discard the edit without writing."""
    edit = get_edit_session(context)
    if not edit.active:
        await update.message.reply_text("Nothing to cancel.")
        return
    transaction_id = edit.editing_id
    edit.cancel()
    await update.message.reply_text(f"↩️ Edit of #{transaction_id} discarded.")


# ── DELETE ────────────────────────────────────────────────

@login_required
@reports_errors
async def delete_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """
    Handle /delete <id> command - delete a transaction.
    Usage: /delete 5
    """
    transaction_id = _parse_id(context.args or [])
    if transaction_id is None:
        await update.message.reply_text("⚠️ Usage: /delete <id>\nExample: /delete 5")
        return

    transaction_service.delete(transaction_id, session.id)

    edit = get_edit_session(context)
    if edit.editing_id == transaction_id:
        edit.cancel()
    get_dashboard(context).refresh_transactions(transaction_service, session.id)
    await update.message.reply_text(f"🗑️ Transaction #{transaction_id} deleted.")
