"""
models/session.py
-----------------
The identity record kept for a logged-in user.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Session:
    """
    Trimmed projection of a user row. Never holds the password hash.

    Attributes:
        id: User primary key.
        name: Display name.
        email: Login email.
    """
    id: int
    name: str
    email: str

    def to_dict(self) -> dict:
        return asdict(self)

    @property
    def initials(self) -> str:
        """Up to two initials from the display name, '?' if it is empty."""
        parts = self.name.split()
        if not parts:
            return "?"
        return "".join(p[0] for p in parts[:2]).upper()
