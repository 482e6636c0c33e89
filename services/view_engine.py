"""
services/view_engine.py
-----------------------
Pure functions that turn the in-memory transaction list into what the
user sees: the filtered and sorted history, the income/expense totals,
the per-category breakdown and the budget progress.

Nothing here touches the database. Totals and the breakdown are taken
over the filtered view; budget progress always uses the full list.
"""

from calendar import monthrange
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from config import BUDGET_DANGER_PCT, BUDGET_WARNING_PCT
from errors import ValidationError
from models.budget import BudgetProgress
from models.filters import SORT_FIELDS, SORT_ORDERS, ViewFilters
from models.summary import Summary
from models.transaction import Transaction

_SORT_KEYS = {
    "date": lambda t: t.date,
    "amount": lambda t: t.amount,
    "title": lambda t: t.title.lower(),
}


def amount_text(amount: Decimal) -> str:
    """Plain digits of an amount without trailing zeros (100.00 -> '100', 12.50 -> '12.5')."""
    return format(Decimal(amount).normalize(), "f")


# ── FILTER / SORT ─────────────────────────────────────────

def matches(transaction: Transaction, filters: ViewFilters) -> bool:
    """True if the transaction passes both the search and the category filter."""
    if filters.search:
        query = filters.search.lower()
        found = (
            query in transaction.title.lower()
            or query in transaction.category.lower()
            or filters.search in amount_text(transaction.amount)
        )
        if not found:
            return False
    if filters.categories and transaction.category not in filters.categories:
        return False
    return True


def filter_transactions(transactions: Iterable[Transaction], filters: ViewFilters) -> list[Transaction]:
    return [t for t in transactions if matches(t, filters)]


def sort_transactions(transactions: Iterable[Transaction], field: str = "date", order: str = "desc") -> list[Transaction]:
    """
    Stable sort on one field.

    Transactions with equal keys keep their relative input order in
    both directions.

    Raises:
        ValidationError: For an unknown field or order.
    """
    if field not in SORT_FIELDS:
        raise ValidationError(f"Cannot sort by '{field}'. Use one of: {', '.join(SORT_FIELDS)}")
    if order not in SORT_ORDERS:
        raise ValidationError(f"Sort order must be 'asc' or 'desc', not '{order}'")
    return sorted(transactions, key=_SORT_KEYS[field], reverse=(order == "desc"))


def build_view(transactions: Iterable[Transaction], filters: ViewFilters) -> list[Transaction]:
    """Filter, then sort, according to the user's current view state."""
    return sort_transactions(
        filter_transactions(transactions, filters), filters.sort_field, filters.sort_order
    )


# ── AGGREGATES ────────────────────────────────────────────
# Amounts are Decimal, so every total below is exact and independent of
# summation order.

ZERO = Decimal("0")


def total_income(view: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in view if t.is_income()), ZERO)


def total_expense(view: Iterable[Transaction]) -> Decimal:
    return sum((t.amount for t in view if t.is_expense()), ZERO)


def balance(view: Iterable[Transaction]) -> Decimal:
    view = list(view)
    return total_income(view) - total_expense(view)


def category_breakdown(view: Iterable[Transaction]) -> dict[str, Decimal]:
    """Expense totals per category, ordered largest first."""
    totals: dict[str, Decimal] = {}
    for t in view:
        if t.is_expense():
            totals[t.category] = totals.get(t.category, ZERO) + t.amount
    return dict(sorted(totals.items(), key=lambda x: -x[1]))


def summarize(view: Iterable[Transaction]) -> Summary:
    view = list(view)
    income = total_income(view)
    expense = total_expense(view)
    return Summary(
        total_income=income,
        total_expense=expense,
        balance=income - expense,
        category_breakdown=category_breakdown(view),
    )


# ── BUDGETS ───────────────────────────────────────────────

def month_bounds(today: Optional[date] = None) -> tuple[date, date]:
    """First and last calendar day of the month containing ``today``."""
    today = today or date.today()
    last_day = monthrange(today.year, today.month)[1]
    return date(today.year, today.month, 1), date(today.year, today.month, last_day)


def current_month_spend(transactions: Iterable[Transaction], category: str, today: Optional[date] = None) -> Decimal:
    """Expenses in ``category`` dated within the current month."""
    start, end = month_bounds(today)
    return sum(
        (
            t.amount for t in transactions
            if t.is_expense() and t.category == category and start <= t.date <= end
        ),
        ZERO,
    )


def budget_status(percentage: float) -> str:
    """'safe' below 70%, 'warning' below 90%, 'danger' from 90% up."""
    if percentage < BUDGET_WARNING_PCT:
        return "safe"
    if percentage < BUDGET_DANGER_PCT:
        return "warning"
    return "danger"


def budget_progress(
    transactions: Iterable[Transaction], category: str, limit: Decimal, today: Optional[date] = None
) -> BudgetProgress:
    """
    Measure this month's spending in a category against its limit.

    Args:
        transactions: The full, unfiltered transaction list.
        category: Budget category.
        limit: Monthly limit, must be finite and positive.
        today: Reference date, defaults to today.

    Raises:
        ValidationError: If ``limit`` is not a finite positive number.
    """
    limit = Decimal(limit)
    if not limit.is_finite() or limit <= 0:
        raise ValidationError(f"Budget limit for {category} must be greater than 0")
    spent = current_month_spend(transactions, category, today)
    percentage = float(spent * 100 / limit)
    return BudgetProgress(
        category=category,
        limit=limit,
        spent=spent,
        percentage=percentage,
        status=budget_status(percentage),
    )
