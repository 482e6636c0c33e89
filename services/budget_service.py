"""
services/budget_service.py
---------------------------
Business logic for monthly budget limits and tracking.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional

from errors import NotFoundError, ValidationError
from models.budget import Budget, BudgetProgress
from models.transaction import Transaction
from repositories.budget_repo import BudgetRepository
from services.transaction_service import parse_category, parse_money
from services.view_engine import budget_progress
from utils.logger import get_logger

logger = get_logger(__name__)


def parse_limit(value: Any) -> Decimal:
    """A monthly limit must be a finite number greater than zero, in cents."""
    if value is None or not str(value).strip():
        raise ValidationError("Please enter a monthly limit")
    return parse_money(value, label="Monthly limit")


class BudgetService:
    """Manages monthly budget limits and their progress."""

    def __init__(self, repo: Optional[BudgetRepository] = None):
        self.repo = repo or BudgetRepository()

    def set_budget(self, user_id: int, category: Any, limit: Any) -> Budget:
        """Create or replace the monthly limit of a category."""
        budget = Budget(
            user_id=user_id,
            category=parse_category(category),
            monthly_limit=parse_limit(limit),
        )
        return self.repo.upsert(budget)

    def list_budgets(self, user_id: int) -> list[Budget]:
        return self.repo.list_by_user(user_id)

    def delete_budget(self, user_id: int, category: Any) -> Budget:
        """
        Delete the budget of a category.

        Returns:
            The deleted budget.

        Raises:
            NotFoundError: If the category has no budget.
        """
        category = parse_category(category)
        for budget in self.repo.list_by_user(user_id):
            if budget.category == category:
                self.repo.delete(budget.id, user_id)
                logger.info(f"Deleted {category} budget for user {user_id}")
                return budget
        raise NotFoundError(f"No budget set for {category}")

    @staticmethod
    def progress(
        transactions: Iterable[Transaction], budgets: Iterable[Budget], today: Optional[date] = None
    ) -> list[BudgetProgress]:
        """Progress of every budget against this month's spending, in budget order."""
        transactions = list(transactions)
        return [
            budget_progress(transactions, b.category, b.monthly_limit, today)
            for b in budgets
        ]
