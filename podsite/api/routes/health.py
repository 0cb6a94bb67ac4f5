"""Health check endpoints."""

import time
from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends, HTTPException

from podsite.api.dependencies import get_kv_store
from podsite.api.models import HealthResponse, ReadinessResponse
from podsite.content.repository import PROFILE_KEY
from podsite.core.exceptions import StorageUnavailable
from podsite.store.kv import KVStore

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Liveness check. Does not touch storage.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc))


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness Check",
    description="Check that the key-value store answers.",
    responses={503: {"description": "Storage unavailable"}},
)
async def readiness(store: KVStore = Depends(get_kv_store)) -> ReadinessResponse:
    """
    Readiness probe for the hosting platform.

    Returns 200 only if a point read against the store succeeds.
    """
    start_time = time.time()
    try:
        store.get(PROFILE_KEY)
    except StorageUnavailable as e:
        logger.error("readiness_check_failed", error=e.message)
        raise HTTPException(status_code=503, detail="Service not ready: storage unavailable")

    return ReadinessResponse(
        status="ready",
        timestamp=datetime.now(timezone.utc),
        latency_ms=round((time.time() - start_time) * 1000, 2),
    )
