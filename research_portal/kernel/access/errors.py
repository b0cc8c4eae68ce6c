"""
Error taxonomy for scoped queries.

Every error carries the HTTP status it maps to and a message that is safe to
show a client. Internal detail (SQL, driver errors) stays in the logs.
"""

from typing import Optional


class AccessError(Exception):
    """Base class for errors raised by the access layer."""

    status_code: int = 500
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccessError):
    """Malformed input: bad enum, bad identifier, bad pagination bounds."""

    status_code = 400
    default_message = "Invalid request"


class AuthorizationError(AccessError):
    """Unrecognized or insufficient role."""

    status_code = 403
    default_message = "Insufficient permissions"


class NotFoundError(AccessError):
    """Record is missing or outside the caller's scope; the two are not distinguished."""

    status_code = 404
    default_message = "Resource not found"


class StorageError(AccessError):
    """Count or fetch against the database failed."""

    status_code = 500
    default_message = "Failed to fetch records"
