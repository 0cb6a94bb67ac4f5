"""Content repository.

Translates content operations into key-value operations and applies the
visibility and merge rules:

- keys are the record ids: ``episode_<ms>_<hex>``, ``blog_<ms>_<hex>``,
  ``contact_<ms>_<hex>`` and the singleton ``profile_data``
- updates are shallow merges over the stored record
- deletes are idempotent
- any authenticated actor may edit any record

Nothing is cached between calls; every operation re-reads the store.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional, TypeVar
from uuid import uuid4

import pydantic
import structlog

from podsite.content.models import (
    DEFAULT_PROFILE,
    IDENTITY_FIELDS,
    BlogPost,
    BlogPostCreate,
    BlogPostUpdate,
    CamelModel,
    ContactMessage,
    ContactMessageCreate,
    Episode,
    EpisodeCreate,
    EpisodeUpdate,
    ProfileData,
    ProfileUpdate,
    estimate_read_time,
)
from podsite.core.exceptions import NotFound, Unauthorized, ValidationError
from podsite.store.kv import KVStore

logger = structlog.get_logger(__name__)

EPISODE_PREFIX = "episode_"
BLOG_PREFIX = "blog_"
CONTACT_PREFIX = "contact_"
PROFILE_KEY = "profile_data"

M = TypeVar("M", bound=CamelModel)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _without_nulls(record: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in record.items() if value is not None}


class ContentRepository:
    """
    CRUD over episodes, blog posts, the profile and contact messages.

    Example:
        repo = ContentRepository(InMemoryKVStore())
        episode = repo.create_episode(EpisodeCreate(title="Pilot"), actor_id="user-1")
        repo.list_episodes()
    """

    def __init__(self, store: KVStore, clock: Callable[[], datetime] = utc_now):
        self._store = store
        self._clock = clock

    # -----------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------

    def _new_id(self, prefix: str, now: datetime) -> str:
        millis = int(now.timestamp() * 1000)
        # The suffix keeps ids distinct when two creates share a millisecond.
        return f"{prefix}{millis}_{uuid4().hex[:6]}"

    @staticmethod
    def _require_actor(actor_id: Optional[str]) -> str:
        if not actor_id:
            raise Unauthorized("Authentication required")
        return actor_id

    @staticmethod
    def _require_title(title: Optional[str]) -> None:
        if not title or not title.strip():
            raise ValidationError("Title is required", field="title")

    def _list(self, prefix: str, model: type[M]) -> list[M]:
        items = []
        for record in self._store.get_by_prefix(prefix):
            try:
                items.append(model.model_validate(record))
            except pydantic.ValidationError as e:
                logger.warning(
                    "skipping_invalid_record",
                    prefix=prefix,
                    record_id=record.get("id") if isinstance(record, dict) else None,
                    error_count=e.error_count(),
                )
        return items

    def _get(self, prefix: str, record_id: str) -> Optional[dict[str, Any]]:
        if not record_id.startswith(prefix):
            return None
        return self._store.get(record_id)

    def _merge(
        self,
        kind: str,
        prefix: str,
        model: type[M],
        record_id: str,
        changes: dict[str, Any],
    ) -> M:
        existing = self._get(prefix, record_id)
        if existing is None:
            raise NotFound(kind, record_id)

        if "title" in changes:
            self._require_title(changes["title"])

        # The id is the storage key and never changes.
        changes.pop("id", None)
        merged = {
            **existing,
            **changes,
            "updatedAt": self._clock().isoformat(),
        }
        record = self._validate(model, merged)
        self._store.set(record_id, _without_nulls(merged))
        return record

    @staticmethod
    def _validate(model: type[M], merged: dict[str, Any]) -> M:
        """Validate a merged record; a null in a required field is a client error."""
        try:
            return model.model_validate(merged)
        except pydantic.ValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else None
            raise ValidationError(f"Invalid value for {field}", field=field) from e

    def _delete(self, prefix: str, record_id: str) -> None:
        # Ids outside this record kind's namespace are treated as absent.
        if record_id.startswith(prefix):
            self._store.delete(record_id)

    # -----------------------------------------------------------------
    # Episodes
    # -----------------------------------------------------------------

    def list_episodes(self) -> list[Episode]:
        """All episodes in storage order."""
        return self._list(EPISODE_PREFIX, Episode)

    def get_episode(self, episode_id: str) -> Episode:
        record = self._get(EPISODE_PREFIX, episode_id)
        if record is None:
            raise NotFound("Episode", episode_id)
        return Episode.model_validate(record)

    def create_episode(self, data: EpisodeCreate, actor_id: Optional[str]) -> Episode:
        actor_id = self._require_actor(actor_id)
        self._require_title(data.title)

        now = self._clock()
        episode = Episode(
            **data.model_dump(),
            id=self._new_id(EPISODE_PREFIX, now),
            publish_date=now.date().isoformat(),
            created_by=actor_id,
            created_at=now,
        )
        self._store.set(episode.id, episode.to_record())

        logger.info("episode_created", episode_id=episode.id, actor_id=actor_id)
        return episode

    def update_episode(
        self, episode_id: str, data: EpisodeUpdate, actor_id: Optional[str]
    ) -> Episode:
        actor_id = self._require_actor(actor_id)
        episode = self._merge("Episode", EPISODE_PREFIX, Episode, episode_id, data.changes())
        logger.info("episode_updated", episode_id=episode_id, actor_id=actor_id)
        return episode

    def delete_episode(self, episode_id: str, actor_id: Optional[str]) -> None:
        actor_id = self._require_actor(actor_id)
        self._delete(EPISODE_PREFIX, episode_id)
        logger.info("episode_deleted", episode_id=episode_id, actor_id=actor_id)

    # -----------------------------------------------------------------
    # Blog posts
    # -----------------------------------------------------------------

    def list_published_blog_posts(self) -> list[BlogPost]:
        """Published posts only, for anonymous visitors."""
        return [post for post in self._list(BLOG_PREFIX, BlogPost) if post.published]

    def list_all_blog_posts(self, actor_id: Optional[str]) -> list[BlogPost]:
        """Every post including drafts, for the admin panel."""
        self._require_actor(actor_id)
        return self._list(BLOG_PREFIX, BlogPost)

    def get_published_blog_post(self, post_id: str) -> BlogPost:
        """A single published post. Drafts are reported as missing."""
        record = self._get(BLOG_PREFIX, post_id)
        if record is None:
            raise NotFound("Blog post", post_id)
        post = BlogPost.model_validate(record)
        if not post.published:
            raise NotFound("Blog post", post_id)
        return post

    def get_featured_post(self) -> Optional[BlogPost]:
        """
        The post shown prominently on the home page.

        Several posts may be flagged; the first published one in storage
        order wins.
        """
        for post in self.list_published_blog_posts():
            if post.featured:
                return post
        return None

    def create_blog_post(self, data: BlogPostCreate, actor_id: Optional[str]) -> BlogPost:
        actor_id = self._require_actor(actor_id)
        self._require_title(data.title)

        now = self._clock()
        fields = data.model_dump()
        read_time = (data.read_time or "").strip() or estimate_read_time(data.content)
        fields["read_time"] = read_time

        post = BlogPost(
            **fields,
            id=self._new_id(BLOG_PREFIX, now),
            publish_date=now.date().isoformat(),
            created_by=actor_id,
            created_at=now,
        )
        self._store.set(post.id, post.to_record())

        logger.info(
            "blog_post_created",
            post_id=post.id,
            actor_id=actor_id,
            published=post.published,
        )
        return post

    def update_blog_post(
        self, post_id: str, data: BlogPostUpdate, actor_id: Optional[str]
    ) -> BlogPost:
        actor_id = self._require_actor(actor_id)
        changes = data.changes()

        # An explicitly blank read time is re-derived from the resulting content.
        if "readTime" in changes and not (changes["readTime"] or "").strip():
            existing = self._get(BLOG_PREFIX, post_id)
            if existing is None:
                raise NotFound("Blog post", post_id)
            content = changes.get("content", existing.get("content", ""))
            changes["readTime"] = estimate_read_time(content or "")

        post = self._merge("Blog post", BLOG_PREFIX, BlogPost, post_id, changes)
        logger.info("blog_post_updated", post_id=post_id, actor_id=actor_id)
        return post

    def delete_blog_post(self, post_id: str, actor_id: Optional[str]) -> None:
        actor_id = self._require_actor(actor_id)
        self._delete(BLOG_PREFIX, post_id)
        logger.info("blog_post_deleted", post_id=post_id, actor_id=actor_id)

    # -----------------------------------------------------------------
    # Profile
    # -----------------------------------------------------------------

    def get_profile(self) -> ProfileData:
        """The stored profile, with blank identity fields filled from the default."""
        stored = self._store.get(PROFILE_KEY)
        if stored is None:
            return DEFAULT_PROFILE.model_copy(deep=True)

        defaults = DEFAULT_PROFILE.to_record()
        record = {**defaults, **_without_nulls(stored)}
        for field in IDENTITY_FIELDS:
            if not record.get(field):
                record[field] = defaults[field]
        try:
            return ProfileData.model_validate(record)
        except pydantic.ValidationError as e:
            logger.warning("invalid_profile_record", error_count=e.error_count())
            return DEFAULT_PROFILE.model_copy(deep=True)

    def update_profile(self, data: ProfileUpdate, actor_id: Optional[str]) -> ProfileData:
        """
        Write the profile singleton.

        Fields absent from ``data`` keep their stored value; the whole record
        is then written back (last writer wins).
        """
        actor_id = self._require_actor(actor_id)

        current = self._store.get(PROFILE_KEY) or DEFAULT_PROFILE.to_record()
        merged = {
            **current,
            **data.changes(),
            "updatedBy": actor_id,
            "updatedAt": self._clock().isoformat(),
        }
        profile = self._validate(ProfileData, merged)
        self._store.set(PROFILE_KEY, _without_nulls(merged))

        logger.info("profile_updated", actor_id=actor_id)
        return profile

    # -----------------------------------------------------------------
    # Contact messages
    # -----------------------------------------------------------------

    def create_contact_message(self, data: ContactMessageCreate) -> ContactMessage:
        """Store a contact form submission. No authentication required."""
        for field in ("name", "email", "subject", "body"):
            if not getattr(data, field).strip():
                raise ValidationError("All fields are required", field=field)

        now = self._clock()
        message = ContactMessage(
            id=self._new_id(CONTACT_PREFIX, now),
            name=data.name,
            email=data.email,
            subject=data.subject,
            body=data.body,
            timestamp=now,
            status="new",
        )
        self._store.set(message.id, message.to_record())

        logger.info("contact_message_created", message_id=message.id, sender=data.email)
        return message

    def list_contact_messages(self, actor_id: Optional[str]) -> list[ContactMessage]:
        """All contact messages, newest first."""
        self._require_actor(actor_id)
        messages = self._list(CONTACT_PREFIX, ContactMessage)
        return sorted(messages, key=lambda message: message.timestamp, reverse=True)
