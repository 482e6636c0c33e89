"""
services/transaction_service.py
-------------------------------
Business logic for adding, editing and deleting transactions.

Every write is validated here before the repository is called, so a
ValidationError never costs a database round-trip.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from config import CATEGORIES, MAX_AMOUNT, TRANSACTION_TYPES
from errors import ValidationError
from models.transaction import Transaction
from repositories.transaction_repo import EDITABLE_FIELDS, TransactionRepository
from utils.logger import get_logger

logger = get_logger(__name__)


# ── PARSING ───────────────────────────────────────────────

CENT = Decimal("0.01")


def parse_money(value: Any, label: str = "Amount") -> Decimal:
    """
    Convert user input to a positive amount in whole cents.

    Raises:
        ValidationError: For text that is not a finite number, a value
            not above zero, more than two decimals, or more than
            ``MAX_AMOUNT``.
    """
    try:
        amount = Decimal(str(value).replace(",", "").strip())
    except InvalidOperation:
        raise ValidationError(f"{label} must be a number, got '{value}'")
    if not amount.is_finite():
        raise ValidationError(f"{label} must be a number, got '{value}'")
    if amount <= 0:
        raise ValidationError(f"{label} must be greater than 0")
    if amount > MAX_AMOUNT:
        raise ValidationError(f"{label} cannot exceed {MAX_AMOUNT:,}")
    if amount != amount.quantize(CENT):
        raise ValidationError(f"{label} can have at most 2 decimal places")
    return amount.quantize(CENT)


def parse_amount(value: Any) -> Decimal:
    """Convert user input to a positive transaction amount."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Please fill all fields")
    return parse_money(value)


def parse_date(value: Any) -> date:
    """Accept a date, 'today', or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, date):
        return value
    if value is None or not str(value).strip():
        raise ValidationError("Please fill all fields")
    text = str(value).strip()
    if text.lower() == "today":
        return date.today()
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise ValidationError("Date must be in the format YYYY-MM-DD")


def parse_category(value: str) -> str:
    """Match a category case-insensitively against ``config.CATEGORIES``."""
    for category in CATEGORIES:
        if category.lower() == str(value).strip().lower():
            return category
    raise ValidationError(f"Unknown category '{value}'. Choose from: {', '.join(CATEGORIES)}")


def parse_type(value: str) -> str:
    text = str(value).strip().lower()
    if text not in TRANSACTION_TYPES:
        raise ValidationError("Type must be 'expense' or 'income'")
    return text


_FIELD_PARSERS = {
    "title": lambda v: str(v).strip(),
    "amount": parse_amount,
    "category": parse_category,
    "type": parse_type,
    "date": parse_date,
}


def validate_fields(fields: dict) -> dict:
    """
    Validate and normalize a full or partial set of transaction fields.

    Args:
        fields: Raw values keyed by field name (title, amount, category, type, date).

    Returns:
        A new dict with parsed values.

    Raises:
        ValidationError: On an empty title, non-positive amount, bad date,
            unknown category/type or unknown field name.
    """
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")
    if "title" in fields and not str(fields["title"] or "").strip():
        raise ValidationError("Please fill all fields")
    return {name: _FIELD_PARSERS[name](value) for name, value in fields.items()}


class TransactionService:
    """
    Handles all business logic related to financial transactions.

    Workflow:
        1. Receive raw values from the handler.
        2. Validate them (no I/O).
        3. Persist via the repository.
    """

    def __init__(self, repo: Optional[TransactionRepository] = None):
        self.repo = repo or TransactionRepository()

    def list_transactions(self, user_id: int) -> list[Transaction]:
        """All of a user's transactions, newest first."""
        return self.repo.list_by_user(user_id)

    def add(self, user_id: int, title: Any, amount: Any, category: Any,
            tx_type: Any, tx_date: Any) -> Transaction:
        """
        Validate and store a new transaction.

        Returns:
            The stored Transaction with its ``id`` assigned.
        """
        if not title or amount in (None, "") or not tx_date:
            raise ValidationError("Please fill all fields")
        values = validate_fields({
            "title": title,
            "amount": amount,
            "category": category,
            "type": tx_type,
            "date": tx_date,
        })
        return self.repo.insert(Transaction(user_id=user_id, **values))

    def update(self, transaction_id: int, user_id: int, fields: dict) -> dict:
        """Validate a partial record and write it. Returns the parsed fields."""
        if not fields:
            raise ValidationError("Nothing to update")
        values = validate_fields(fields)
        self.repo.update(transaction_id, user_id, values)
        return values

    def delete(self, transaction_id: int, user_id: int) -> None:
        self.repo.delete(transaction_id, user_id)

    def get(self, transaction_id: int, user_id: int) -> Optional[Transaction]:
        return self.repo.get(transaction_id, user_id)


class EditSession:
    """
    The single in-progress edit of a user.

    ``begin`` copies a transaction's fields into a scratch buffer,
    ``change`` edits the buffer, ``save`` writes it through the service
    and ``cancel`` drops it. Starting a new edit replaces the old one.
    """

    def __init__(self):
        self.editing_id: Optional[int] = None
        self.scratch: dict = {}

    @property
    def active(self) -> bool:
        return self.editing_id is not None

    def begin(self, transaction: Transaction) -> None:
        self.editing_id = transaction.id
        self.scratch = {
            "title": transaction.title,
            "amount": transaction.amount,
            "category": transaction.category,
            "type": transaction.type,
            "date": transaction.date,
        }

    def change(self, field: str, value: Any) -> None:
        """Set one scratch field. The value is validated on save."""
        if not self.active:
            raise ValidationError("No transaction is being edited. Use /edit <id> first.")
        if field not in EDITABLE_FIELDS:
            raise ValidationError(f"Unknown field '{field}'. Editable: {', '.join(EDITABLE_FIELDS)}")
        self.scratch[field] = value

    def save(self, service: TransactionService, user_id: int) -> int:
        """
        Write the scratch buffer and leave editing state.

        Returns:
            The id of the transaction that was saved.

        Raises:
            ValidationError: If nothing is being edited or a field is invalid.
                The edit stays open so the user can fix the field.
        """
        if not self.active:
            raise ValidationError("No transaction is being edited.")
        transaction_id = self.editing_id
        service.update(transaction_id, user_id, dict(self.scratch))
        self.cancel()
        return transaction_id

    def cancel(self) -> None:
        self.editing_id = None
        self.scratch = {}
