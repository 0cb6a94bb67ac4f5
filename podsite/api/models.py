"""Pydantic models for API requests and responses.

Record shapes (episodes, posts, profile, messages) live in
``podsite.content.models``; this module only wraps them into the
envelopes the site and admin panel expect.
"""

from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

from podsite.content.models import BlogPost, ContactMessage, Episode, ProfileData
from podsite.markdown.nodes import ContentNode


# =============================================================================
# Auth Models
# =============================================================================


class LoginRequest(BaseModel):
    """Email/password sign-in."""

    email: str = Field(..., min_length=1, json_schema_extra={"example": "host@example.com"})
    password: str = Field(..., min_length=1)


class SignupRequest(BaseModel):
    """Admin account creation."""

    email: str = Field(..., min_length=1, json_schema_extra={"example": "host@example.com"})
    password: str = Field(..., min_length=1)
    name: str = Field(default="", description="Display name stored in user metadata")


class LoginResponse(BaseModel):
    success: bool = True
    access_token: str = Field(..., description="Bearer token for admin requests")
    user: dict[str, Any] = Field(default_factory=dict)


class SignupResponse(BaseModel):
    success: bool = True
    user: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Generic Envelopes
# =============================================================================


class SuccessResponse(BaseModel):
    success: bool = True


class CreatedResponse(BaseModel):
    success: bool = True
    id: str = Field(..., description="Generated record id")


# =============================================================================
# Content Envelopes
# =============================================================================


# Optional list ordering; omitted means storage order.
ListSort = Literal["publishDate"]


class EpisodeListResponse(BaseModel):
    episodes: list[Episode] = Field(default_factory=list)


class EpisodeResponse(BaseModel):
    episode: Episode


class BlogPostListResponse(BaseModel):
    posts: list[BlogPost] = Field(default_factory=list)


class FeaturedPostResponse(BaseModel):
    post: Optional[BlogPost] = None


class BlogPostDetailResponse(BaseModel):
    """A published post together with its rendered body."""

    post: BlogPost
    content: list[ContentNode] = Field(default_factory=list, description="Rendered content nodes")
    html: str = Field(default="", description="HTML rendering of the content nodes")


class ContactSubmitResponse(BaseModel):
    success: bool = True
    message: str = "Contact form submitted successfully"


class ContactMessageListResponse(BaseModel):
    messages: list[ContactMessage] = Field(default_factory=list, description="Newest first")


class ExperienceResponse(BaseModel):
    years: int
    months: int
    label: str


class ProfileResponse(BaseModel):
    profile: ProfileData
    experience: ExperienceResponse


# =============================================================================
# Health Models
# =============================================================================


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
    timestamp: datetime


class ReadinessResponse(BaseModel):
    status: Literal["ready"] = "ready"
    timestamp: datetime
    latency_ms: Optional[float] = Field(None, description="Store round-trip latency")


# =============================================================================
# Error Models
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Human-readable error message")
    message: Optional[str] = Field(None, description="Follow-up instruction for the caller")
    detail: Optional[str] = Field(None, description="Additional error details (debug only)")


class ValidationErrorDetail(BaseModel):
    """Details for request body errors."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Validation error message")


class ValidationErrorResponse(BaseModel):
    error: str = Field(default="Invalid request format")
    errors: list[ValidationErrorDetail] = Field(default_factory=list)
