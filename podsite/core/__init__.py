"""
Core infrastructure modules for Podsite.

- exceptions: Error hierarchy with HTTP status mapping
- logging: structlog configuration
"""

from podsite.core.exceptions import (
    PodsiteError,
    ValidationError,
    Unauthorized,
    NotFound,
    StorageUnavailable,
    ConfigurationError,
)

__all__ = [
    "PodsiteError",
    "ValidationError",
    "Unauthorized",
    "NotFound",
    "StorageUnavailable",
    "ConfigurationError",
]
