"""Domain error taxonomy.

Learn: services raise these; the API layer maps them 1:1 to HTTP status
codes in api/error_handling.py. Nothing below the API layer knows about
HTTP beyond the status_code attribute.
"""

from typing import Optional


class AuthGateError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[list[dict]] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AuthGateError):
    """Malformed input. `errors` lists {field, message} entries."""

    status_code = 400
    default_message = "Validation failed"


class UnauthorizedError(AuthGateError):
    """Bad credentials or a missing/invalid/expired token."""

    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(AuthGateError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AuthGateError):
    status_code = 409
    default_message = "Conflict"


class InternalError(AuthGateError):
    """Store or transport failure. Callers own any retry."""

    status_code = 500
