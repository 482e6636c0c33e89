"""
models/summary.py
-----------------
Aggregates computed over the visible transaction list.
"""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class Summary:
    """
    Attributes:
        total_income: Sum of income amounts.
        total_expense: Sum of expense amounts.
        balance: ``total_income - total_expense``.
        category_breakdown: Expense total per category, largest first.
    """
    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    category_breakdown: dict[str, Decimal] = field(default_factory=dict)
