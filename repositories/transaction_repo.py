"""
repositories/transaction_repo.py
--------------------------------
Data access layer for expense/income transactions.
All SQL queries related to the `expenses` table live here.
"""

from typing import Optional

import psycopg2
from psycopg2 import sql

from db.connection import get_connection, release_connection
from errors import NotFoundError, RemoteError, ValidationError
from models.transaction import Transaction
from utils.logger import get_logger

logger = get_logger(__name__)

# Columns a caller may change through update()
EDITABLE_FIELDS = ("title", "amount", "category", "type", "date")
_REQUIRED_FIELDS = ("user_id", "title", "amount", "category", "type", "date")


class TransactionRepository:
    """Repository for CRUD operations on the expenses table."""

    # ── CREATE ────────────────────────────────────────────

    def insert(self, transaction: Transaction) -> Transaction:
        """
        Insert a new expense/income record.

        Args:
            transaction: The Transaction to persist (``id`` is ignored).

        Returns:
            The same Transaction with its `id` and `created_at` populated.

        Raises:
            ValidationError: If a required field is empty.
            RemoteError: If the database rejects the insert.
        """
        missing = [f for f in _REQUIRED_FIELDS if getattr(transaction, f) in (None, "")]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        query = """
            INSERT INTO expenses (user_id, title, amount, category, type, date)
            VALUES (%s, %s, %s, %s, %s, %s)
            RETURNING id, created_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (
                    transaction.user_id, transaction.title, transaction.amount,
                    transaction.category, transaction.type, transaction.date,
                ))
                row = cur.fetchone()
                transaction.id = row["id"]
                transaction.created_at = row["created_at"]
            conn.commit()
            logger.info(f"Added {transaction.type} #{transaction.id} for user {transaction.user_id}")
            return transaction
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to add transaction: {e}")
            raise RemoteError("Failed to add transaction") from e
        finally:
            release_connection(conn)

    # ── READ ──────────────────────────────────────────────

    def list_by_user(self, user_id: int) -> list[Transaction]:
        """
        Fetch every transaction owned by a user, newest first.

        Returns:
            List of Transaction objects ordered by date descending.
        """
        query = "SELECT * FROM expenses WHERE user_id = %s ORDER BY date DESC, id DESC;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (user_id,))
                return [self._row_to_transaction(r) for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to list transactions for user {user_id}: {e}")
            raise RemoteError("Failed to load transactions") from e
        finally:
            release_connection(conn)

    def get(self, transaction_id: int, user_id: int) -> Optional[Transaction]:
        """Fetch a single transaction by ID, scoped to a user. None if absent."""
        query = "SELECT * FROM expenses WHERE id = %s AND user_id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (transaction_id, user_id))
                row = cur.fetchone()
                return self._row_to_transaction(row) if row else None
        except psycopg2.Error as e:
            logger.error(f"Failed to fetch transaction #{transaction_id}: {e}")
            raise RemoteError("Failed to load transaction") from e
        finally:
            release_connection(conn)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, transaction_id: int, user_id: int, fields: dict) -> None:
        """
        Overwrite some columns of an existing transaction.

        Args:
            transaction_id: Primary key.
            user_id: Owning user (security scope).
            fields: Column name → new value, keys from ``EDITABLE_FIELDS``.

        Raises:
            ValidationError: If ``fields`` is empty or names other columns.
            NotFoundError: If no row matched.
            RemoteError: If the database rejects the update.
        """
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if not fields or unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown)) or 'none given'}")

        columns = [f for f in EDITABLE_FIELDS if f in fields]
        query = sql.SQL("UPDATE expenses SET {} WHERE id = %s AND user_id = %s;").format(
            sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(c)) for c in columns
            )
        )
        params = [fields[c] for c in columns] + [transaction_id, user_id]

        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, params)
                updated = cur.rowcount > 0
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to update transaction #{transaction_id}: {e}")
            raise RemoteError("Failed to update transaction") from e
        finally:
            release_connection(conn)

        if not updated:
            raise NotFoundError(f"Transaction #{transaction_id} not found")
        logger.info(f"Updated transaction #{transaction_id} for user {user_id}: {', '.join(columns)}")

    # ── DELETE ────────────────────────────────────────────

    def delete(self, transaction_id: int, user_id: int) -> None:
        """
        Delete a transaction by ID, scoped to a user.

        Raises:
            NotFoundError: If no row matched.
            RemoteError: If the database rejects the delete.
        """
        query = "DELETE FROM expenses WHERE id = %s AND user_id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (transaction_id, user_id))
                deleted = cur.rowcount > 0
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete transaction #{transaction_id}: {e}")
            raise RemoteError("Failed to delete transaction") from e
        finally:
            release_connection(conn)

        if not deleted:
            raise NotFoundError(f"Transaction #{transaction_id} not found")
        logger.info(f"Deleted transaction #{transaction_id} for user {user_id}")

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_transaction(row: dict) -> Transaction:
        """Convert a RealDictCursor row to a Transaction. NUMERIC amounts arrive as Decimal."""
        return Transaction(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            amount=row["amount"],
            category=row["category"],
            type=row["type"],
            date=row["date"],
            created_at=row.get("created_at"),
        )
