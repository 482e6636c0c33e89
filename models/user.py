"""
models/user.py
--------------
Domain model for registered users.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from models.session import Session


@dataclass
class User:
    """A row of the users table. ``password_hash`` is a bcrypt hash."""
    name: str
    email: str
    password_hash: str
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def to_session(self) -> Session:
        """Project to the session record, dropping the credential."""
        return Session(id=self.id, name=self.name, email=self.email)
