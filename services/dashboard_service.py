"""
services/dashboard_service.py
-----------------------------
Per-user dashboard state: the loaded transactions and budgets, the
current filters, and the derived view computed from them.

The state starts in "loading" and becomes "loaded" after the first
transaction fetch, successful or not. A failed fetch is logged and keeps
whatever list was there before.
"""

from datetime import date
from typing import Optional

from errors import RemoteError
from models.budget import Budget, BudgetProgress
from models.filters import ViewFilters
from models.summary import Summary
from models.transaction import Transaction
from services.budget_service import BudgetService
from services.transaction_service import TransactionService
from services.view_engine import build_view, summarize
from utils.logger import get_logger

logger = get_logger(__name__)


class DashboardState:
    """What one user is looking at."""

    def __init__(self):
        self.transactions: list[Transaction] = []
        self.budgets: list[Budget] = []
        self.filters = ViewFilters()
        self.loading = True

    # ── LOADING ───────────────────────────────────────────

    def refresh_transactions(self, service: TransactionService, user_id: int) -> None:
        try:
            self.transactions = service.list_transactions(user_id)
        except RemoteError as e:
            logger.error(f"Error fetching transactions for user {user_id}: {e}")
        finally:
            self.loading = False

    def refresh_budgets(self, service: BudgetService, user_id: int) -> None:
        try:
            self.budgets = service.list_budgets(user_id)
        except RemoteError as e:
            logger.error(f"Error fetching budgets for user {user_id}: {e}")

    def refresh(self, transaction_service: TransactionService,
                budget_service: BudgetService, user_id: int) -> None:
        self.refresh_transactions(transaction_service, user_id)
        self.refresh_budgets(budget_service, user_id)

    # ── DERIVED VIEW ──────────────────────────────────────

    def view(self) -> list[Transaction]:
        return build_view(self.transactions, self.filters)

    def summary(self) -> Summary:
        return summarize(self.view())

    def budget_progress(self, today: Optional[date] = None) -> list[BudgetProgress]:
        # Budgets ignore the search and category filters
        return BudgetService.progress(self.transactions, self.budgets, today)
