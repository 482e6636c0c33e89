"""
handlers/budget_handler.py
---------------------------
Handles budget management commands.
"""

from telegram import Update
from telegram.ext import ContextTypes

from config import CATEGORIES
from handlers.common import get_dashboard, reports_errors
from models.session import Session
from security.auth import login_required
from services.budget_service import BudgetService
from services.transaction_service import TransactionService
from utils.formatting import money, render_budgets
from utils.logger import get_logger

logger = get_logger(__name__)
budget_service = BudgetService()
transaction_service = TransactionService()

BUDGET_USAGE = (
    "💰 *Monthly Budgets*\n\n"
    "• `/budget` → budget progress\n"
    "• `/budget set <category> <limit>`\n"
    "• `/budget delete <category>`\n\n"
    f"*Categories:* {', '.join(CATEGORIES)}"
)


@login_required
@reports_errors
async def budget_command(update: Update, context: ContextTypes.DEFAULT_TYPE, session: Session) -> None:
    """
    Handle /budget command - manage monthly budgets.

    Usage:
        /budget                  → show budget progress
        /budget set Food 5000    → set or replace a category budget
        /budget delete Food      → remove a budget
    """
    dashboard = get_dashboard(context)

    if not context.args:
        # Progress is always measured against freshly loaded data
        dashboard.refresh(transaction_service, budget_service, session.id)
        await update.message.reply_text(render_budgets(dashboard.budget_progress()))
        return

    action = context.args[0].lower()

    if action == "set":
        if len(context.args) < 3:
            await update.message.reply_text(BUDGET_USAGE, parse_mode="Markdown")
            return
        budget = budget_service.set_budget(session.id, context.args[1], context.args[2])
        dashboard.refresh_budgets(budget_service, session.id)
        await update.message.reply_text(
            f"✅ {budget.category} budget set:\n"
            f"  💰 Limit: {money(budget.monthly_limit)} per month"
        )

    elif action == "delete":
        if len(context.args) < 2:
            await update.message.reply_text("⚠️ Usage: /budget delete <category>")
            return
        budget = budget_service.delete_budget(session.id, context.args[1])
        dashboard.refresh_budgets(budget_service, session.id)
        await update.message.reply_text(f"🗑️ {budget.category} budget deleted.")

    else:
        await update.message.reply_text(BUDGET_USAGE, parse_mode="Markdown")
