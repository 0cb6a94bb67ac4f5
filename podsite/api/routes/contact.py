"""Contact form endpoints."""

import structlog
from fastapi import APIRouter, Depends

from podsite.api.dependencies import get_current_actor, get_repository
from podsite.api.errors import storage_call
from podsite.api.models import (
    ContactMessageListResponse,
    ContactSubmitResponse,
    ErrorResponse,
)
from podsite.auth.identity import Actor
from podsite.config.settings import Settings, get_settings
from podsite.content.models import ContactMessageCreate
from podsite.content.repository import ContentRepository
from podsite.core.exceptions import StorageUnavailable

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/contact", tags=["Contact"])


def _notification_email(repo: ContentRepository, settings: Settings) -> str:
    try:
        return repo.get_profile().email or settings.default_contact_email
    except StorageUnavailable:
        return settings.default_contact_email


@router.post(
    "",
    response_model=ContactSubmitResponse,
    summary="Submit the contact form",
    description="Public. name, email, subject and body are all required.",
    responses={400: {"model": ErrorResponse, "description": "Missing fields"}},
)
async def submit_contact(
    form: ContactMessageCreate,
    repo: ContentRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> ContactSubmitResponse:
    message = storage_call(
        lambda: repo.create_contact_message(form),
        "Failed to submit contact form",
    )

    # Messages are stored only; delivery to the owner's inbox is not wired up.
    logger.info(
        "contact_notification_pending",
        message_id=message.id,
        notify=_notification_email(repo, settings),
        subject=message.subject,
    )
    return ContactSubmitResponse()


@router.get(
    "/admin",
    response_model=ContactMessageListResponse,
    summary="List contact messages",
    description="All messages, newest first.",
    responses={401: {"model": ErrorResponse, "description": "Not signed in"}},
)
async def list_messages(
    actor: Actor = Depends(get_current_actor),
    repo: ContentRepository = Depends(get_repository),
) -> ContactMessageListResponse:
    messages = storage_call(
        lambda: repo.list_contact_messages(actor.id),
        "Failed to fetch contact messages",
    )
    return ContactMessageListResponse(messages=messages)
