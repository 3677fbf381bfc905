"""
Normalized error codes.

Values are lowercase snake_case and appear verbatim in the ``error_code`` field
of log events.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Failure categories shared by drivers and exception classification."""

    # Raised by drivers
    UNSUPPORTED = "unsupported"
    INVALID_RESPONSE = "invalid_response"
    NOT_FOUND = "not_found"

    # Classified from transport exceptions
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
