"""
security/session.py
-------------------
Per-user session storage.

The session lives in a persistent key-value store owned by the chat
(``context.user_data``, made durable by PicklePersistence). Only a signed
token is stored, so a record written into the store by anything that does
not hold ``SESSION_SECRET`` is treated as absent.
"""

from collections.abc import MutableMapping
from datetime import datetime, timezone
from typing import Optional

from jose import JWTError, jwt

from config import SESSION_ALGORITHM, SESSION_SECRET
from models.session import Session
from utils.logger import get_logger

logger = get_logger(__name__)

SESSION_KEY = "user"


class SessionStore:
    """
    Reads and writes the logged-in user's identity.

    Args:
        storage: Any mutable mapping that survives between requests.
        secret: Signing key, defaults to ``config.SESSION_SECRET``.
    """

    def __init__(self, storage: MutableMapping, secret: str = SESSION_SECRET):
        self.storage = storage
        self.secret = secret

    def set(self, session: Session) -> None:
        """Sign and persist the session, replacing any previous one."""
        claims = {
            "sub": str(session.id),
            "name": session.name,
            "email": session.email,
            "iat": int(datetime.now(timezone.utc).timestamp()),
        }
        self.storage[SESSION_KEY] = jwt.encode(claims, self.secret, algorithm=SESSION_ALGORITHM)

    def get(self) -> Optional[Session]:
        """Return the stored session, or None if missing or not validly signed."""
        token = self.storage.get(SESSION_KEY)
        if not isinstance(token, str) or not token:
            return None
        try:
            claims = jwt.decode(token, self.secret, algorithms=[SESSION_ALGORITHM])
            return Session(id=int(claims["sub"]), name=claims["name"], email=claims["email"])
        except (JWTError, KeyError, ValueError) as e:
            logger.warning(f"Discarding invalid session token: {e}")
            return None

    def clear(self) -> None:
        """Remove the session. No-op when nobody is logged in."""
        self.storage.pop(SESSION_KEY, None)

    def is_authenticated(self) -> bool:
        return self.get() is not None
