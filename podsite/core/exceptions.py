"""
Core exception hierarchy for Podsite.

Every error carries the HTTP status it maps to at the API boundary, so
route handlers never need to translate repository failures by hand.
"""

from typing import Any, Optional


# =============================================================================
# Base Exceptions
# =============================================================================


class PodsiteError(Exception):
    """Base exception for all Podsite errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Request Errors
# =============================================================================


class ValidationError(PodsiteError):
    """
    A required field is missing or invalid.

    User-correctable; the message is surfaced verbatim to the caller.
    """

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message, {"field": field} if field else None)


class Unauthorized(PodsiteError):
    """Missing, invalid or expired access token."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized", reason: Optional[str] = None):
        self.reason = reason
        super().__init__(message, {"reason": reason} if reason else None)


class NotFound(PodsiteError):
    """Operation on a record id that does not exist."""

    status_code = 404

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found", {"id": record_id})


# =============================================================================
# Infrastructure Errors
# =============================================================================


class StorageUnavailable(PodsiteError):
    """
    The key-value store failed.

    Logged with full detail; callers only ever see a generic message.
    """

    status_code = 500

    def __init__(self, operation: str, message: str, details: Optional[dict[str, Any]] = None):
        self.operation = operation
        super().__init__(f"[{operation}] {message}", details)


class ConfigurationError(PodsiteError):
    """Raised when configuration is invalid or missing."""

    status_code = 500

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        details = {"config_key": config_key} if config_key else None
        super().__init__(message, details)
