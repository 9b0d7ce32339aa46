"""
Utility functions for the application.
"""
from typing import Any, Dict
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as an aware datetime."""
    return datetime.now(timezone.utc)


def is_strict_int(value: Any) -> bool:
    """True for real integers; bools are rejected even though they subclass int."""
    return isinstance(value, int) and not isinstance(value, bool)


def format_error(message: str, kind: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": message, "kind": kind}
    if details:
        response["details"] = details
    return response


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes read back from the database as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def normalize_email(email: str) -> str:
    """Emails are compared case-insensitively, so store and look them up lowercased."""
    return email.strip().lower()
