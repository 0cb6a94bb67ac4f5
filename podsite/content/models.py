"""Content records and write payloads.

Stored records and wire payloads use camelCase keys (``publishDate``,
``youtubeUrl``); Python attributes are snake_case.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

WORDS_PER_MINUTE = 200

ContactStatus = Literal["new", "read", "replied"]


class CamelModel(BaseModel):
    """Base model mapping snake_case attributes to camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_record(self) -> dict[str, Any]:
        """Serialize to the JSON shape stored in the key-value store."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def changes(self) -> dict[str, Any]:
        """
        Fields explicitly sent in a partial update, as stored keys.

        An explicit ``null`` is kept so the merge can clear optional fields.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


# =============================================================================
# Episodes
# =============================================================================


class Episode(CamelModel):
    """A podcast episode."""

    id: str
    title: str
    description: str = ""
    duration: str = ""
    publish_date: str = ""
    thumbnail: str = ""
    youtube_url: Optional[str] = None
    spotify_url: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    created_by: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EpisodeCreate(CamelModel):
    """Request body for a new episode. Title emptiness is checked by the repository."""

    title: str = ""
    description: str = ""
    duration: str = ""
    thumbnail: str = ""
    youtube_url: Optional[str] = None
    spotify_url: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class EpisodeUpdate(CamelModel):
    """Partial episode update; only fields present in the body are merged."""

    title: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[str] = None
    publish_date: Optional[str] = None
    thumbnail: Optional[str] = None
    youtube_url: Optional[str] = None
    spotify_url: Optional[str] = None
    tags: Optional[list[str]] = None


# =============================================================================
# Blog Posts
# =============================================================================


class BlogPost(CamelModel):
    """A blog post. Only ``published`` posts are publicly visible."""

    id: str
    title: str
    excerpt: str = ""
    content: str = ""
    publish_date: str = ""
    read_time: str = ""
    tags: list[str] = Field(default_factory=list)
    featured: bool = False
    published: bool = False
    thumbnail: Optional[str] = None
    created_by: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BlogPostCreate(CamelModel):
    """Request body for a new blog post."""

    title: str = ""
    excerpt: str = ""
    content: str = ""
    read_time: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    featured: bool = False
    published: bool = False
    thumbnail: Optional[str] = None


class BlogPostUpdate(CamelModel):
    """Partial blog post update."""

    title: Optional[str] = None
    excerpt: Optional[str] = None
    content: Optional[str] = None
    publish_date: Optional[str] = None
    read_time: Optional[str] = None
    tags: Optional[list[str]] = None
    featured: Optional[bool] = None
    published: Optional[bool] = None
    thumbnail: Optional[str] = None


# =============================================================================
# Profile
# =============================================================================


class ProfileData(CamelModel):
    """The site owner's public bio. A single instance exists."""

    name: str = ""
    title: str = ""
    bio: str = ""
    photo: str = ""
    email: str = ""
    linkedin_url: str = ""
    twitter_url: str = ""
    education: str = ""
    work_start_date: str = ""
    skills: list[str] = Field(default_factory=list)
    achievements: str = ""
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None


class ProfileUpdate(CamelModel):
    """Partial profile update."""

    name: Optional[str] = None
    title: Optional[str] = None
    bio: Optional[str] = None
    photo: Optional[str] = None
    email: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    education: Optional[str] = None
    work_start_date: Optional[str] = None
    skills: Optional[list[str]] = None
    achievements: Optional[str] = None


DEFAULT_PROFILE = ProfileData(
    name="Podcast Host",
    title="Host & Writer",
    bio="Conversations about technology, research and the people behind them.",
    photo="https://images.unsplash.com/photo-1712174766230-cb7304feaafe?w=1080",
    email="hello@example.com",
    linkedin_url="",
    twitter_url="",
    education="",
    work_start_date="2021-01",
    skills=["Podcasting", "Writing", "Research"],
    achievements="",
)

# Identity fields that fall back to DEFAULT_PROFILE when stored blank.
IDENTITY_FIELDS = ("name", "title", "bio", "photo")


# =============================================================================
# Contact Messages
# =============================================================================


class ContactMessage(CamelModel):
    """A message left through the public contact form. Append-only."""

    id: str
    name: str
    email: str
    subject: str
    body: str
    timestamp: datetime
    status: ContactStatus = "new"


class ContactMessageCreate(CamelModel):
    """Contact form body. All four fields are required to be non-empty."""

    name: str = ""
    email: str = ""
    subject: str = ""
    body: str = ""


# =============================================================================
# Derived values
# =============================================================================


def estimate_read_time(content: str) -> str:
    """
    Reading time at 200 words per minute, rounded up, at least one minute.

    >>> estimate_read_time("word " * 400)
    '2 min read'
    """
    words = len(content.split())
    minutes = max(1, math.ceil(words / WORDS_PER_MINUTE))
    return f"{minutes} min read"


@dataclass(frozen=True)
class Experience:
    """Whole years and remaining months since the work start date."""

    years: int
    months: int

    @property
    def label(self) -> str:
        return f"{self.years}.{self.months}"


def calculate_experience(work_start_date: Optional[str], today: Optional[date] = None) -> Experience:
    """
    Years of experience from a ``YYYY-MM`` start date.

    Missing, malformed or future dates yield zero.
    """
    if not work_start_date:
        return Experience(0, 0)
    try:
        year_text, month_text = work_start_date.split("-")[:2]
        year, month = int(year_text), int(month_text)
    except ValueError:
        return Experience(0, 0)
    if not 1 <= month <= 12:
        return Experience(0, 0)

    today = today or date.today()
    total_months = (today.year - year) * 12 + (today.month - month)
    if total_months < 0:
        return Experience(0, 0)
    return Experience(total_months // 12, total_months % 12)


def sort_by_publish_date(items: Iterable[Any]) -> list[Any]:
    """Newest first by ``publish_date`` (ISO dates sort lexically)."""
    return sorted(items, key=lambda item: item.publish_date or "", reverse=True)
