"""
models/transaction.py
---------------------
Domain model for financial transactions (expenses and income).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Transaction:
    """
    Represents a single financial transaction.

    Attributes:
        id: Database primary key (None for new records).
        user_id: Owning user's ID.
        title: Free-text label shown in the history.
        amount: Positive amount in whole cents.
        category: One of ``config.CATEGORIES``.
        type: Either 'expense' or 'income'.
        date: Calendar date of the transaction.
        created_at: Timestamp when the record was created.
    """
    user_id: int
    title: str
    amount: Decimal
    category: str
    type: str  # 'expense' | 'income'
    date: date = field(default_factory=date.today)
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def is_expense(self) -> bool:
        """Returns True if this is an expense transaction."""
        return self.type == "expense"

    def is_income(self) -> bool:
        """Returns True if this is an income transaction."""
        return self.type == "income"

    def __str__(self) -> str:
        sign = "-" if self.is_expense() else "+"
        return f"#{self.id} | {self.date} | {self.title} | {self.category} | {sign}{self.amount:.2f}"
