"""Podsite API - Main FastAPI Application.

This module provides the FastAPI application for the podcast/blog site.
It includes:
- CORS middleware configuration
- Error mapping: every failure answers ``{"error": ...}`` with a status code
- Public content reads, the authenticated admin CRUD surface and health checks

Usage:
    # Run with uvicorn
    uvicorn podsite.api.main:app --reload

    # Or run directly
    python -m podsite.api.main
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from podsite import __version__
from podsite.api.dependencies import reset_dependencies
from podsite.api.models import ErrorResponse, ValidationErrorDetail, ValidationErrorResponse
from podsite.api.routes import (
    auth_router,
    blog_router,
    contact_router,
    episodes_router,
    health_router,
    profile_router,
)
from podsite.config.settings import Settings, get_settings
from podsite.core.exceptions import PodsiteError, StorageUnavailable, Unauthorized
from podsite.core.logging import configure_logging

logger = structlog.get_logger(__name__)

API_TITLE = "Podsite API"
API_DESCRIPTION = """
## Content service for a podcast and blog website

- **Public**: episodes, published blog posts, the host profile, the contact form
- **Admin**: create, edit and delete episodes and posts, edit the profile,
  read contact messages

### Authentication

Sign in with `POST /api/auth/login` and send the returned token as
`Authorization: Bearer <token>` on admin requests.
"""


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Storage and identity clients are created lazily on first use, so
    startup only configures logging.
    """
    settings: Settings = app.state.settings
    configure_logging(settings)
    logger.info(
        "application_started",
        environment=settings.app_env,
        kv_backend=settings.kv_backend,
        version=__version__,
    )

    yield

    reset_dependencies()
    logger.info("application_stopped")


# =============================================================================
# Exception Handlers
# =============================================================================


async def podsite_exception_handler(request: Request, exc: PodsiteError) -> JSONResponse:
    """Map domain errors to their status code with an ``error`` body."""
    if isinstance(exc, Unauthorized):
        logger.info("request_unauthorized", path=request.url.path, reason=exc.reason)
        body = ErrorResponse(error=exc.message, message="Please sign in again")
    elif isinstance(exc, StorageUnavailable) or exc.status_code >= 500:
        logger.error(
            "request_failed",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        body = ErrorResponse(error="Internal server error")
    else:
        body = ErrorResponse(error=exc.message)

    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(mode="json", exclude_none=True),
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTPException detail under ``error`` like every other failure."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request bodies answer 400 with per-field detail."""
    errors = [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
        )
        for error in exc.errors()
    ]
    response = ValidationErrorResponse(errors=errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=response.model_dump(mode="json"),
    )


def _generic_exception_handler(settings: Settings):
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        response = ErrorResponse(
            error="Internal server error",
            detail=str(exc) if settings.debug else None,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=response.model_dump(mode="json", exclude_none=True),
        )

    return generic_exception_handler


# =============================================================================
# Application Factory
# =============================================================================


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI application with all routers under ``api_prefix``."""
    settings = settings or get_settings()

    app = FastAPI(
        title=API_TITLE,
        description=API_DESCRIPTION,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        openapi_tags=[
            {"name": "Health", "description": "Liveness and readiness"},
            {"name": "Auth", "description": "Admin sign-in and sign-up"},
            {"name": "Episodes", "description": "Podcast episodes"},
            {"name": "Blog", "description": "Blog posts and rendered content"},
            {"name": "Contact", "description": "Contact form and inbox"},
            {"name": "Profile", "description": "The host's public profile"},
        ],
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    app.add_exception_handler(PodsiteError, podsite_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler(settings))

    api_router = APIRouter(prefix=settings.api_prefix)
    api_router.include_router(health_router)
    api_router.include_router(auth_router)
    api_router.include_router(episodes_router)
    api_router.include_router(blog_router)
    api_router.include_router(contact_router)
    api_router.include_router(profile_router)
    app.include_router(api_router)

    return app


app = create_app()


# =============================================================================
# Development Server
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "podsite.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
