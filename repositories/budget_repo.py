"""
repositories/budget_repo.py
-----------------------------
Data access layer for monthly budgets.
"""

import psycopg2

from db.connection import get_connection, release_connection
from errors import NotFoundError, RemoteError
from models.budget import Budget
from utils.logger import get_logger

logger = get_logger(__name__)


class BudgetRepository:
    """Repository for CRUD operations on the budgets table."""

    def upsert(self, budget: Budget) -> Budget:
        """Set or replace the limit for (user, category). Returns the budget with its id."""
        query = """
            INSERT INTO budgets (user_id, category, monthly_limit)
            VALUES (%s, %s, %s)
            ON CONFLICT (user_id, category)
            DO UPDATE SET monthly_limit = EXCLUDED.monthly_limit
            RETURNING id;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (budget.user_id, budget.category, budget.monthly_limit))
                budget.id = cur.fetchone()["id"]
            conn.commit()
            logger.info(f"Set {budget.category} budget to {budget.monthly_limit:.2f} for user {budget.user_id}")
            return budget
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to set budget: {e}")
            raise RemoteError("Failed to save budget") from e
        finally:
            release_connection(conn)

    def list_by_user(self, user_id: int) -> list[Budget]:
        """Get all budget limits for a user, ordered by category."""
        query = "SELECT id, user_id, category, monthly_limit FROM budgets WHERE user_id = %s ORDER BY category;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (user_id,))
                return [
                    Budget(
                        id=r["id"],
                        user_id=r["user_id"],
                        category=r["category"],
                        monthly_limit=r["monthly_limit"],
                    )
                    for r in cur.fetchall()
                ]
        except psycopg2.Error as e:
            logger.error(f"Failed to list budgets for user {user_id}: {e}")
            raise RemoteError("Failed to load budgets") from e
        finally:
            release_connection(conn)

    def delete(self, budget_id: int, user_id: int) -> None:
        """Delete a budget by ID. Raises NotFoundError if no row matched."""
        query = "DELETE FROM budgets WHERE id = %s AND user_id = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (budget_id, user_id))
                deleted = cur.rowcount > 0
            conn.commit()
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to delete budget #{budget_id}: {e}")
            raise RemoteError("Failed to delete budget") from e
        finally:
            release_connection(conn)

        if not deleted:
            raise NotFoundError(f"Budget #{budget_id} not found")
