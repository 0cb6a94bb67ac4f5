"""Blog post endpoints.

Anonymous visitors only ever see published posts. The admin listing
returns drafts too and needs a bearer token.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query

from podsite.api.dependencies import get_current_actor, get_repository
from podsite.api.errors import public_read, storage_call
from podsite.api.models import (
    BlogPostDetailResponse,
    BlogPostListResponse,
    CreatedResponse,
    ErrorResponse,
    FeaturedPostResponse,
    ListSort,
    SuccessResponse,
)
from podsite.auth.identity import Actor
from podsite.config.settings import Settings, get_settings
from podsite.content.models import BlogPostCreate, BlogPostUpdate, sort_by_publish_date
from podsite.content.repository import ContentRepository
from podsite.markdown import render, render_html

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/blog", tags=["Blog"])


@router.get(
    "",
    response_model=BlogPostListResponse,
    summary="List published posts",
    description="Storage order, or newest first with sort=publishDate.",
)
async def list_published_posts(
    sort: Optional[ListSort] = Query(None, description="publishDate: newest first"),
    repo: ContentRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> BlogPostListResponse:
    posts = public_read(repo.list_published_blog_posts, [], "Failed to fetch blog posts", settings)
    if sort == "publishDate":
        posts = sort_by_publish_date(posts)
    return BlogPostListResponse(posts=posts)


@router.get(
    "/admin",
    response_model=BlogPostListResponse,
    summary="List all posts",
    description="Published posts and drafts, for the admin panel.",
    responses={401: {"model": ErrorResponse, "description": "Not signed in"}},
)
async def list_all_posts(
    actor: Actor = Depends(get_current_actor),
    repo: ContentRepository = Depends(get_repository),
) -> BlogPostListResponse:
    posts = storage_call(lambda: repo.list_all_blog_posts(actor.id), "Failed to fetch blog posts")
    return BlogPostListResponse(posts=posts)


@router.get(
    "/featured",
    response_model=FeaturedPostResponse,
    summary="Featured post",
    description="The first published post flagged as featured, or null.",
)
async def featured_post(
    repo: ContentRepository = Depends(get_repository),
    settings: Settings = Depends(get_settings),
) -> FeaturedPostResponse:
    post = public_read(repo.get_featured_post, None, "Failed to fetch blog posts", settings)
    return FeaturedPostResponse(post=post)


@router.get(
    "/{post_id}",
    response_model=BlogPostDetailResponse,
    summary="Read a published post",
    description="The post plus its markdown body rendered to content nodes and HTML.",
    responses={404: {"model": ErrorResponse, "description": "Missing or unpublished"}},
)
async def get_post(
    post_id: str,
    repo: ContentRepository = Depends(get_repository),
) -> BlogPostDetailResponse:
    post = storage_call(lambda: repo.get_published_blog_post(post_id), "Failed to fetch blog post")
    nodes = render(post.content)
    return BlogPostDetailResponse(post=post, content=nodes, html=render_html(nodes))


@router.post(
    "",
    response_model=CreatedResponse,
    summary="Create a post",
    description="readTime is derived from the content (200 words/minute) when left empty.",
    responses={
        400: {"model": ErrorResponse, "description": "Missing title"},
        401: {"model": ErrorResponse, "description": "Not signed in"},
    },
)
async def create_post(
    post: BlogPostCreate,
    actor: Actor = Depends(get_current_actor),
    repo: ContentRepository = Depends(get_repository),
) -> CreatedResponse:
    created = storage_call(
        lambda: repo.create_blog_post(post, actor.id),
        "Failed to create blog post",
    )
    return CreatedResponse(success=True, id=created.id)


@router.put(
    "/{post_id}",
    response_model=SuccessResponse,
    summary="Update a post",
    responses={
        401: {"model": ErrorResponse, "description": "Not signed in"},
        404: {"model": ErrorResponse, "description": "Blog post not found"},
    },
)
async def update_post(
    post_id: str,
    update: BlogPostUpdate,
    actor: Actor = Depends(get_current_actor),
    repo: ContentRepository = Depends(get_repository),
) -> SuccessResponse:
    storage_call(
        lambda: repo.update_blog_post(post_id, update, actor.id),
        "Failed to update blog post",
    )
    return SuccessResponse()


@router.delete(
    "/{post_id}",
    response_model=SuccessResponse,
    summary="Delete a post",
    responses={401: {"model": ErrorResponse, "description": "Not signed in"}},
)
async def delete_post(
    post_id: str,
    actor: Actor = Depends(get_current_actor),
    repo: ContentRepository = Depends(get_repository),
) -> SuccessResponse:
    storage_call(
        lambda: repo.delete_blog_post(post_id, actor.id),
        "Failed to delete blog post",
    )
    return SuccessResponse()
