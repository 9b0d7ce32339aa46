"""
Domain exceptions for the trip and occupancy services.

Every error carries a ``kind`` and an HTTP status so the API layer can
render it without knowing which service raised it.
"""
from typing import Any, Optional


class LogisticsError(Exception):
    """Base exception for domain errors."""
    kind = "Error"
    status_code = 500

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(LogisticsError):
    """Raised when no entity matches the given identifier."""
    kind = "NotFound"
    status_code = 404


class InvalidInputError(LogisticsError):
    """Raised when a caller supplies a malformed or out-of-range value."""
    kind = "InvalidInput"
    status_code = 400


class InvalidStateError(LogisticsError):
    """Raised when an operation would break an entity invariant."""
    kind = "InvalidState"
    status_code = 400


class ServiceUnavailableError(LogisticsError):
    """Raised when the database is unreachable or timed out."""
    kind = "ServiceUnavailable"
    status_code = 503


class PartialFailureError(LogisticsError):
    """Raised when a multi-step operation stopped part way. Safe to retry."""
    kind = "PartialFailure"
    status_code = 500
    retryable = True
