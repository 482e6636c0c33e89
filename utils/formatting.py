"""
utils/formatting.py
-------------------
Plain-text renderers for chat replies.
"""

from decimal import Decimal

from config import CURRENCY_SYMBOL
from models.budget import BudgetProgress
from models.filters import ViewFilters
from models.summary import Summary
from models.transaction import Transaction

_STATUS_ICONS = {"safe": "🟢", "warning": "🟡", "danger": "🔴"}


def money(amount: Decimal) -> str:
    return f"{CURRENCY_SYMBOL} {amount:,.2f}"


def progress_bar(fill: float, length: int = 15) -> str:
    """Text progress bar. ``fill`` is a percentage already clamped to 0..100."""
    filled = int(fill / 100 * length)
    return "█" * filled + "░" * (length - filled)


def render_transaction(t: Transaction) -> str:
    sign = "-" if t.is_expense() else "+"
    icon = "🔴" if t.is_expense() else "🟢"
    return f"{icon} #{t.id} | {t.date.isoformat()} | {t.title} | {t.category} | {sign}{money(t.amount)}"


def render_filters(filters: ViewFilters) -> str:
    parts = [f"sorted by {filters.sort_field} ({filters.sort_order})"]
    if filters.search:
        parts.append(f"search \"{filters.search}\"")
    if filters.categories:
        parts.append("categories: " + ", ".join(sorted(filters.categories)))
    return " · ".join(parts)


def render_history(view: list[Transaction], filters: ViewFilters, loading: bool = False) -> str:
    if loading:
        return "⏳ Loading transactions..."
    lines = [f"📜 Transaction History ({len(view)})", f"   {render_filters(filters)}", ""]
    if not view and filters.is_active():
        lines.append("🔍 No transactions match the current filters. /clear to reset them.")
    elif not view:
        lines.append("📭 No transactions found. Add your first transaction with /add")
    else:
        lines.extend(render_transaction(t) for t in view)
    return "\n".join(lines)


def render_summary(summary: Summary) -> str:
    lines = [
        "📊 Summary",
        f"💰 Total Income: {money(summary.total_income)}",
        f"💸 Total Expense: {money(summary.total_expense)}",
        f"{'📈' if summary.balance >= 0 else '📉'} Balance: {money(summary.balance)}",
        "",
        "📂 Category Breakdown (expenses only)",
    ]
    if not summary.category_breakdown:
        lines.append("  No expense data to display.")
    else:
        for category, total in summary.category_breakdown.items():
            lines.append(f"  • {category}: {money(total)}")
        lines.append(f"  Total Expenses: {money(summary.total_expense)}")
    return "\n".join(lines)


def render_budgets(progress: list[BudgetProgress]) -> str:
    if not progress:
        return (
            "📭 No budgets set.\n"
            "💡 Use /budget set <category> <limit> to create one."
        )
    lines = ["💰 Monthly Budgets", ""]
    for p in progress:
        lines.append(f"{_STATUS_ICONS[p.status]} {p.category}: {money(p.spent)} / {money(p.limit)} ({p.percentage:.1f}%)")
        lines.append(f"  {progress_bar(p.fill)}")
        lines.append(f"  Remaining: {money(p.remaining)}")
    return "\n".join(lines)
