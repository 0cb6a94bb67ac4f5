"""Content records and the repository that stores them."""

from podsite.content.models import (
    BlogPost,
    BlogPostCreate,
    BlogPostUpdate,
    ContactMessage,
    ContactMessageCreate,
    DEFAULT_PROFILE,
    Episode,
    EpisodeCreate,
    EpisodeUpdate,
    Experience,
    ProfileData,
    ProfileUpdate,
    calculate_experience,
    estimate_read_time,
    sort_by_publish_date,
)
from podsite.content.repository import (
    BLOG_PREFIX,
    CONTACT_PREFIX,
    EPISODE_PREFIX,
    PROFILE_KEY,
    ContentRepository,
)

__all__ = [
    "BlogPost",
    "BlogPostCreate",
    "BlogPostUpdate",
    "ContactMessage",
    "ContactMessageCreate",
    "DEFAULT_PROFILE",
    "Episode",
    "EpisodeCreate",
    "EpisodeUpdate",
    "Experience",
    "ProfileData",
    "ProfileUpdate",
    "calculate_experience",
    "estimate_read_time",
    "sort_by_publish_date",
    "BLOG_PREFIX",
    "CONTACT_PREFIX",
    "EPISODE_PREFIX",
    "PROFILE_KEY",
    "ContentRepository",
]
