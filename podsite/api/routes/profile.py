"""Profile endpoints for the site owner's bio."""

import structlog
from fastapi import APIRouter, Depends

from podsite.api.dependencies import get_current_actor, get_repository
from podsite.api.errors import public_read, storage_call
from podsite.api.models import (
    ErrorResponse,
    ExperienceResponse,
    ProfileResponse,
    SuccessResponse,
)
from podsite.auth.identity import Actor
from podsite.config.settings import Settings, get_settings
from podsite.content.models import DEFAULT_PROFILE, ProfileUpdate, calculate_experience
from podsite.content.repository import ContentRepository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get(
    "",
    response_model=ProfileResponse,
    summary="Get the profile",
    description="The stored profile, or a default one when none has been saved.",
)
async def get_profile(
    repo: ContentRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> ProfileResponse:
    profile = public_read(repo.get_profile, DEFAULT_PROFILE, "Failed to fetch profile", settings)
    experience = calculate_experience(profile.work_start_date)
    return ProfileResponse(
        profile=profile,
        experience=ExperienceResponse(
            years=experience.years,
            months=experience.months,
            label=experience.label,
        ),
    )


@router.put(
    "",
    response_model=SuccessResponse,
    summary="Update the profile",
    responses={401: {"model": ErrorResponse, "description": "Not signed in"}},
)
async def update_profile(
    update: ProfileUpdate,
    actor: Actor = Depends(get_current_actor),
    repo: ContentRepository = Depends(get_repository),
) -> SuccessResponse:
    storage_call(lambda: repo.update_profile(update, actor.id), "Failed to update profile")
    return SuccessResponse()
