"""
repositories/user_repo.py
--------------------------
Data access layer for user records.
"""

from typing import Optional

import psycopg2
from psycopg2.errors import UniqueViolation

from db.connection import get_connection, release_connection
from errors import RemoteError, ValidationError
from models.user import User
from utils.logger import get_logger

logger = get_logger(__name__)


class UserRepository:
    """Repository for the users table."""

    def create(self, name: str, email: str, password_hash: str) -> User:
        """
        Insert a new user.

        Args:
            name: Display name.
            email: Login email, unique across users.
            password_hash: bcrypt hash of the password.

        Returns:
            The created User with `id` and `created_at` populated.

        Raises:
            ValidationError: If the email is already registered.
            RemoteError: On any other database failure.
        """
        query = """
            INSERT INTO users (name, email, password_hash)
            VALUES (%s, %s, %s)
            RETURNING id, created_at;
        """
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (name, email, password_hash))
                row = cur.fetchone()
            conn.commit()
            logger.info(f"Registered user #{row['id']}")
            return User(
                id=row["id"],
                name=name,
                email=email,
                password_hash=password_hash,
                created_at=row["created_at"],
            )
        except UniqueViolation as e:
            conn.rollback()
            raise ValidationError("Email is already registered") from e
        except psycopg2.Error as e:
            conn.rollback()
            logger.error(f"Failed to create user: {e}")
            raise RemoteError("Registration failed") from e
        finally:
            release_connection(conn)

    def get_by_email(self, email: str) -> Optional[User]:
        """
        Fetch a user by email.

        Returns:
            User or None.
        """
        query = "SELECT id, name, email, password_hash, created_at FROM users WHERE email = %s;"
        conn = get_connection()
        try:
            with conn.cursor() as cur:
                cur.execute(query, (email,))
                row = cur.fetchone()
                if row:
                    return User(
                        id=row["id"],
                        name=row["name"],
                        email=row["email"],
                        password_hash=row["password_hash"],
                        created_at=row["created_at"],
                    )
                return None
        except psycopg2.Error as e:
            logger.error(f"Failed to fetch user by email: {e}")
            raise RemoteError("Login failed") from e
        finally:
            release_connection(conn)
