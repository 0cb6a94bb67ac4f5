"""Mapping of storage failures to HTTP responses."""

from typing import Callable, TypeVar

import structlog
from fastapi import HTTPException

from podsite.config.settings import Settings
from podsite.core.exceptions import StorageUnavailable

logger = structlog.get_logger(__name__)

T = TypeVar("T")


def storage_call(call: Callable[[], T], message: str) -> T:
    """
    Run a repository call, turning StorageUnavailable into a generic 500.

    Other Podsite errors (validation, not found, unauthorized) propagate to
    the application exception handler unchanged.
    """
    try:
        return call()
    except StorageUnavailable as e:
        logger.error("storage_unavailable", operation=e.operation, error=e.message)
        raise HTTPException(status_code=500, detail=message) from e


def public_read(call: Callable[[], T], fallback: T, message: str, settings: Settings) -> T:
    """
    Run a public read.

    With ``degrade_public_reads`` on, storage failures answer ``fallback``
    instead of a 500 so anonymous visitors never see an error.
    """
    try:
        return call()
    except StorageUnavailable as e:
        logger.error(
            "public_read_failed",
            operation=e.operation,
            error=e.message,
            degraded=settings.degrade_public_reads,
        )
        if settings.degrade_public_reads:
            return fallback
        raise HTTPException(status_code=500, detail=message) from e
