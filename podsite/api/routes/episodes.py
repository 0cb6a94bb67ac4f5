"""Episode endpoints.

Listing and single-episode reads are public; create, update and delete
need a bearer token.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query

from podsite.api.dependencies import get_current_actor, get_repository
from podsite.api.errors import public_read, storage_call
from podsite.api.models import (
    CreatedResponse,
    EpisodeListResponse,
    EpisodeResponse,
    ErrorResponse,
    ListSort,
    SuccessResponse,
)
from podsite.auth.identity import Actor
from podsite.config.settings import Settings, get_settings
from podsite.content.models import EpisodeCreate, EpisodeUpdate, sort_by_publish_date
from podsite.content.repository import ContentRepository

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/episodes", tags=["Episodes"])


@router.get(
    "",
    response_model=EpisodeListResponse,
    summary="List episodes",
    description="All episodes in storage order, or newest first with sort=publishDate.",
)
async def list_episodes(
    sort: Optional[ListSort] = Query(None, description="publishDate: newest first"),
    repo: ContentRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> EpisodeListResponse:
    episodes = public_read(repo.list_episodes, [], "Failed to fetch episodes", settings)
    if sort == "publishDate":
        episodes = sort_by_publish_date(episodes)
    return EpisodeListResponse(episodes=episodes)


@router.get(
    "/{episode_id}",
    response_model=EpisodeResponse,
    summary="Get an episode",
    responses={404: {"model": ErrorResponse, "description": "Episode not found"}},
)
async def get_episode(
    episode_id: str,
    repo: ContentRepository = Depends(get_repository),
) -> EpisodeResponse:
    episode = storage_call(lambda: repo.get_episode(episode_id), "Failed to fetch episode")
    return EpisodeResponse(episode=episode)


@router.post(
    "",
    response_model=CreatedResponse,
    summary="Create an episode",
    responses={
        400: {"model": ErrorResponse, "description": "Missing title"},
        401: {"model": ErrorResponse, "description": "Not signed in"},
    },
)
async def create_episode(
    episode: EpisodeCreate,
    actor: Actor = Depends(get_current_actor),
    repo: ContentRepository = Depends(get_repository),
) -> CreatedResponse:
    created = storage_call(
        lambda: repo.create_episode(episode, actor.id),
        "Failed to create episode",
    )
    return CreatedResponse(success=True, id=created.id)


@router.put(
    "/{episode_id}",
    response_model=SuccessResponse,
    summary="Update an episode",
    description="Shallow merge of the provided fields over the stored episode.",
    responses={
        401: {"model": ErrorResponse, "description": "Not signed in"},
        404: {"model": ErrorResponse, "description": "Episode not found"},
    },
)
async def update_episode(
    episode_id: str,
    update: EpisodeUpdate,
    actor: Actor = Depends(get_current_actor),
    repo: ContentRepository = Depends(get_repository),
) -> SuccessResponse:
    storage_call(
        lambda: repo.update_episode(episode_id, update, actor.id),
        "Failed to update episode",
    )
    return SuccessResponse()


@router.delete(
    "/{episode_id}",
    response_model=SuccessResponse,
    summary="Delete an episode",
    description="Idempotent: deleting a missing id succeeds.",
    responses={401: {"model": ErrorResponse, "description": "Not signed in"}},
)
async def delete_episode(
    episode_id: str,
    actor: Actor = Depends(get_current_actor),
    repo: ContentRepository = Depends(get_repository),
) -> SuccessResponse:
    storage_call(
        lambda: repo.delete_episode(episode_id, actor.id),
        "Failed to delete episode",
    )
    return SuccessResponse()
