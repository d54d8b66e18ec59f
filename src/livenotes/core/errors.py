"""
Domain error taxonomy.

Stores and services raise these; the gateway turns them into an
``ErrorResponse`` with the matching status code. None of them is fatal
to the process.
"""

from typing import Any, Optional


class LiveNotesError(Exception):
    """Base class for every recoverable domain failure."""

    category = "Error"
    status_code = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidInputError(LiveNotesError):
    """Malformed or missing request fields; client must fix and retry."""

    category = "InvalidInput"
    status_code = 400


class UnauthenticatedError(LiveNotesError):
    """Missing, invalid or expired credentials; client must re-authenticate."""

    category = "Unauthenticated"
    status_code = 401


class ForbiddenError(LiveNotesError):
    """Valid identity without ownership of the target."""

    category = "Forbidden"
    status_code = 403


class NotFoundError(LiveNotesError):
    category = "NotFound"
    status_code = 404


class ConflictError(LiveNotesError):
    category = "Conflict"
    status_code = 409
