"""
errors.py
---------
Exception taxonomy shared by every layer.

Each error carries a short, user-facing message. Handlers catch
``TrackerError`` and show ``str(error)`` to the user; nothing else
about the failure leaves the service layer.
"""


class TrackerError(Exception):
    """Base class for all expected application errors."""


class ValidationError(TrackerError):
    """Input rejected before any database call (missing field, bad amount...)."""


class NotFoundError(TrackerError):
    """An update or delete matched no row for the current user."""


class RemoteError(TrackerError):
    """The database failed to complete a request."""


class AuthenticationError(TrackerError):
    """Login failed. The message never reveals which field was wrong."""
