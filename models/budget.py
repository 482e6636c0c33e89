"""
models/budget.py
----------------
Domain models for monthly category budgets and their progress.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class Budget:
    """A monthly spending ceiling for one category. Unique per (user, category)."""
    user_id: int
    category: str
    monthly_limit: Decimal
    id: Optional[int] = None


@dataclass
class BudgetProgress:
    """
    Current-month spending measured against a budget.

    ``percentage`` is reported unclamped; ``fill`` is the same value capped
    at 100 for drawing a progress bar.
    """
    category: str
    limit: Decimal
    spent: Decimal
    percentage: float
    status: str  # 'safe' | 'warning' | 'danger'

    @property
    def fill(self) -> float:
        return min(self.percentage, 100.0)

    @property
    def remaining(self) -> Decimal:
        return max(Decimal("0"), self.limit - self.spent)
