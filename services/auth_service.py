"""
services/auth_service.py
------------------------
Registration and login.

Passwords are stored as bcrypt hashes and checked with bcrypt.checkpw;
the plain password never reaches the database.
"""

from typing import Optional

import bcrypt

from config import MIN_PASSWORD_LENGTH
from errors import AuthenticationError, ValidationError
from models.session import Session
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


class AuthService:
    """Creates accounts and verifies credentials."""

    def __init__(self, repo: Optional[UserRepository] = None):
        self.repo = repo or UserRepository()

    def register(self, name: str, email: str, password: str) -> Session:
        """
        Create an account and return its session record.

        Raises:
            ValidationError: Missing field, short password or taken email.
        """
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name or not email or not password:
            raise ValidationError("All fields are required")
        if "@" not in email:
            raise ValidationError("Please enter a valid email")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        if self.repo.get_by_email(email) is not None:
            raise ValidationError("Email is already registered")

        user = self.repo.create(name, email, hash_password(password))
        return user.to_session()

    def login(self, email: str, password: str) -> Session:
        """
        Check credentials and return the session record.

        Raises:
            ValidationError: If a field is empty.
            AuthenticationError: Unknown email or wrong password (same message).
        """
        email = (email or "").strip().lower()
        if not email or not password:
            raise ValidationError("All fields are required")

        user = self.repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info(f"User #{user.id} logged in")
        return user.to_session()
