"""Unit tests for the content repository over the in-memory store."""

from datetime import timedelta

import pytest

from podsite.content import (
    BLOG_PREFIX,
    DEFAULT_PROFILE,
    PROFILE_KEY,
    BlogPostCreate,
    BlogPostUpdate,
    ContactMessageCreate,
    ContentRepository,
    EpisodeCreate,
    EpisodeUpdate,
    ProfileUpdate,
)
from podsite.core.exceptions import NotFound, StorageUnavailable, Unauthorized, ValidationError
from podsite.store.kv import InMemoryKVStore

from tests.conftest import FailingKVStore, StepClock

ACTOR = "user-1"


class TestEpisodes:
    """Episode CRUD."""

    def test_create_stamps_server_fields(self, repository, clock):
        """Server-side fields come from the clock and the actor."""
        episode = repository.create_episode(
            EpisodeCreate(title="Pilot", duration="42:00", tags=["ai", "ai"]),
            ACTOR,
        )

        assert episode.id.startswith("episode_1714564800000_")
        assert episode.publish_date == "2024-05-01"
        assert episode.created_by == ACTOR
        assert episode.created_at is not None
        assert episode.tags == ["ai", "ai"]

    def test_create_then_read_round_trips(self, repository):
        created = repository.create_episode(
            EpisodeCreate(
                title="Pilot",
                description="First one",
                youtube_url="https://youtu.be/x",
            ),
            ACTOR,
        )

        [stored] = repository.list_episodes()
        assert stored == created
        assert repository.get_episode(created.id) == created

    def test_ids_unique_within_same_millisecond(self, memory_store):
        """A frozen clock still yields distinct ids."""
        repo = ContentRepository(memory_store, clock=StepClock(step=timedelta(0)))
        ids = {repo.create_episode(EpisodeCreate(title=f"E{i}"), ACTOR).id for i in range(20)}

        assert len(ids) == 20
        assert len(repo.list_episodes()) == 20

    @pytest.mark.parametrize("title", ["", "   "])
    def test_create_requires_title(self, repository, memory_store, title):
        with pytest.raises(ValidationError):
            repository.create_episode(EpisodeCreate(title=title), ACTOR)
        assert len(memory_store) == 0

    def test_create_requires_actor(self, repository, memory_store):
        with pytest.raises(Unauthorized):
            repository.create_episode(EpisodeCreate(title="Pilot"), None)
        assert repository.list_episodes() == []
        assert len(memory_store) == 0

    def test_update_merges_and_stamps(self, repository):
        created = repository.create_episode(
            EpisodeCreate(title="Pilot", description="Old", tags=["a"]),
            ACTOR,
        )

        updated = repository.update_episode(
            created.id, EpisodeUpdate(description="New"), "someone-else"
        )

        assert updated.title == "Pilot"
        assert updated.description == "New"
        assert updated.tags == ["a"]
        assert updated.created_by == ACTOR
        assert updated.updated_at is not None
        assert repository.get_episode(created.id) == updated

    def test_update_missing_episode(self, repository):
        with pytest.raises(NotFound):
            repository.update_episode("episode_404", EpisodeUpdate(title="x"), ACTOR)

    def test_update_rejects_blank_title(self, repository):
        created = repository.create_episode(EpisodeCreate(title="Pilot"), ACTOR)
        with pytest.raises(ValidationError):
            repository.update_episode(created.id, EpisodeUpdate(title=""), ACTOR)
        assert repository.get_episode(created.id).title == "Pilot"

    def test_null_clears_optional_field(self, repository, memory_store):
        created = repository.create_episode(
            EpisodeCreate(title="Pilot", youtube_url="https://youtu.be/x"), ACTOR
        )

        updated = repository.update_episode(
            created.id, EpisodeUpdate.model_validate({"youtubeUrl": None}), ACTOR
        )

        assert updated.youtube_url is None
        assert repository.get_episode(created.id).youtube_url is None
        assert "youtubeUrl" not in memory_store.get(created.id)

    @pytest.mark.parametrize("field", ["title", "tags", "description"])
    def test_null_rejected_for_required_fields(self, repository, field):
        created = repository.create_episode(EpisodeCreate(title="Pilot", tags=["a"]), ACTOR)

        with pytest.raises(ValidationError):
            repository.update_episode(
                created.id, EpisodeUpdate.model_validate({field: None}), ACTOR
            )

        stored = repository.get_episode(created.id)
        assert stored.title == "Pilot"
        assert stored.tags == ["a"]

    def test_update_cannot_reach_other_record_kinds(self, repository):
        post = repository.create_blog_post(BlogPostCreate(title="Post"), ACTOR)
        with pytest.raises(NotFound):
            repository.update_episode(post.id, EpisodeUpdate(title="Hijack"), ACTOR)

    def test_delete_is_idempotent(self, repository):
        created = repository.create_episode(EpisodeCreate(title="Pilot"), ACTOR)

        repository.delete_episode(created.id, ACTOR)
        repository.delete_episode(created.id, ACTOR)
        repository.delete_episode("episode_never_existed", ACTOR)

        assert repository.list_episodes() == []

    def test_delete_ignores_foreign_keys(self, repository, memory_store):
        repository.update_profile(ProfileUpdate(name="Host"), ACTOR)
        repository.delete_episode(PROFILE_KEY, ACTOR)
        assert memory_store.get(PROFILE_KEY) is not None

    def test_invalid_records_are_skipped(self, repository, memory_store):
        memory_store.set("episode_bad", {"id": "episode_bad"})
        repository.create_episode(EpisodeCreate(title="Good"), ACTOR)

        assert [e.title for e in repository.list_episodes()] == ["Good"]


class TestBlogPosts:
    """Blog post CRUD and visibility."""

    def test_only_published_posts_are_public(self, repository):
        repository.create_blog_post(BlogPostCreate(title="Draft"), ACTOR)
        repository.create_blog_post(BlogPostCreate(title="Live", published=True), ACTOR)

        assert [p.title for p in repository.list_published_blog_posts()] == ["Live"]
        assert {p.title for p in repository.list_all_blog_posts(ACTOR)} == {"Draft", "Live"}

    def test_no_published_posts(self, repository):
        repository.create_blog_post(BlogPostCreate(title="Draft 1"), ACTOR)
        repository.create_blog_post(BlogPostCreate(title="Draft 2"), ACTOR)

        assert repository.list_published_blog_posts() == []

    def test_admin_listing_requires_actor(self, repository):
        with pytest.raises(Unauthorized):
            repository.list_all_blog_posts(None)

    def test_read_time_derived_from_content(self, repository):
        post = repository.create_blog_post(
            BlogPostCreate(title="Long", content="word " * 400), ACTOR
        )
        assert post.read_time == "2 min read"

    def test_read_time_minimum_one_minute(self, repository):
        post = repository.create_blog_post(BlogPostCreate(title="Short", content="hello"), ACTOR)
        assert post.read_time == "1 min read"

    def test_explicit_read_time_kept(self, repository):
        post = repository.create_blog_post(
            BlogPostCreate(title="Custom", content="word " * 400, read_time="10 min read"),
            ACTOR,
        )
        assert post.read_time == "10 min read"

    def test_blank_read_time_on_update_is_recomputed(self, repository):
        post = repository.create_blog_post(BlogPostCreate(title="P", content="hi"), ACTOR)

        updated = repository.update_blog_post(
            post.id, BlogPostUpdate(content="word " * 401, read_time=""), ACTOR
        )

        assert updated.read_time == "3 min read"

    def test_published_post_lookup_hides_drafts(self, repository):
        draft = repository.create_blog_post(BlogPostCreate(title="Draft"), ACTOR)
        live = repository.create_blog_post(BlogPostCreate(title="Live", published=True), ACTOR)

        assert repository.get_published_blog_post(live.id).title == "Live"
        with pytest.raises(NotFound):
            repository.get_published_blog_post(draft.id)

    def test_featured_post_is_first_published_match(self, repository):
        repository.create_blog_post(BlogPostCreate(title="Draft", featured=True), ACTOR)
        repository.create_blog_post(
            BlogPostCreate(title="First", featured=True, published=True), ACTOR
        )
        repository.create_blog_post(
            BlogPostCreate(title="Second", featured=True, published=True), ACTOR
        )

        assert repository.get_featured_post().title == "First"

    def test_no_featured_post(self, repository):
        repository.create_blog_post(BlogPostCreate(title="Plain", published=True), ACTOR)
        assert repository.get_featured_post() is None

    def test_publish_via_update(self, repository):
        post = repository.create_blog_post(BlogPostCreate(title="Draft"), ACTOR)
        repository.update_blog_post(post.id, BlogPostUpdate(published=True), ACTOR)
        assert [p.id for p in repository.list_published_blog_posts()] == [post.id]

    def test_delete_post(self, repository, memory_store):
        post = repository.create_blog_post(BlogPostCreate(title="Bye"), ACTOR)
        repository.delete_blog_post(post.id, ACTOR)
        assert memory_store.get_by_prefix(BLOG_PREFIX) == []


class TestProfile:
    """Profile singleton."""

    def test_default_profile_on_empty_store(self, repository):
        profile = repository.get_profile()

        assert profile == DEFAULT_PROFILE
        for field in ("name", "title", "bio", "photo"):
            assert getattr(profile, field)

    def test_update_then_read(self, repository, memory_store):
        repository.update_profile(ProfileUpdate(name="Ada", skills=["Python"]), ACTOR)

        profile = repository.get_profile()
        assert profile.name == "Ada"
        assert profile.skills == ["Python"]
        assert profile.updated_by == ACTOR
        assert memory_store.get(PROFILE_KEY)["updatedBy"] == ACTOR

    def test_partial_update_keeps_other_fields(self, repository):
        repository.update_profile(ProfileUpdate(name="Ada", email="ada@example.com"), ACTOR)
        repository.update_profile(ProfileUpdate(bio="New bio"), ACTOR)

        profile = repository.get_profile()
        assert profile.name == "Ada"
        assert profile.email == "ada@example.com"
        assert profile.bio == "New bio"

    def test_blank_identity_fields_fall_back(self, repository, memory_store):
        memory_store.set(PROFILE_KEY, {"name": "", "email": "x@example.com"})

        profile = repository.get_profile()
        assert profile.name == DEFAULT_PROFILE.name
        assert profile.photo == DEFAULT_PROFILE.photo
        assert profile.email == "x@example.com"

    def test_null_fields_in_stored_profile_use_defaults(self, repository, memory_store):
        memory_store.set(PROFILE_KEY, {"name": "Ada", "skills": None})

        profile = repository.get_profile()

        assert profile.name == "Ada"
        assert profile.skills == DEFAULT_PROFILE.skills

    def test_malformed_stored_profile_falls_back_to_default(self, repository, memory_store):
        memory_store.set(PROFILE_KEY, {"name": "Ada", "skills": {"not": "a list"}})

        assert repository.get_profile() == DEFAULT_PROFILE

    def test_null_rejected_for_profile_fields(self, repository):
        repository.update_profile(ProfileUpdate(name="Ada"), ACTOR)

        with pytest.raises(ValidationError, match="name"):
            repository.update_profile(ProfileUpdate.model_validate({"name": None}), ACTOR)

        assert repository.get_profile().name == "Ada"

    def test_unauthenticated_update_changes_nothing(self, repository, memory_store):
        repository.update_profile(ProfileUpdate(name="Ada"), ACTOR)

        with pytest.raises(Unauthorized):
            repository.update_profile(ProfileUpdate(name="Mallory"), "")

        assert repository.get_profile().name == "Ada"


class TestContactMessages:
    """Contact form storage."""

    def form(self, subject: str = "Hello") -> ContactMessageCreate:
        return ContactMessageCreate(
            name="Grace", email="grace@example.com", subject=subject, body="Loved the show"
        )

    def test_create_message(self, repository):
        message = repository.create_contact_message(self.form())

        assert message.id.startswith("contact_")
        assert message.status == "new"
        assert message.timestamp is not None

    @pytest.mark.parametrize("missing", ["name", "email", "subject", "body"])
    def test_all_fields_required(self, repository, memory_store, missing):
        data = self.form().model_dump()
        data[missing] = " "

        with pytest.raises(ValidationError, match="All fields are required"):
            repository.create_contact_message(ContactMessageCreate(**data))
        assert len(memory_store) == 0

    def test_newest_first(self, repository):
        for subject in ("t1", "t2", "t3"):
            repository.create_contact_message(self.form(subject))

        messages = repository.list_contact_messages(ACTOR)
        assert [m.subject for m in messages] == ["t3", "t2", "t1"]

    def test_listing_requires_actor(self, repository):
        with pytest.raises(Unauthorized):
            repository.list_contact_messages(None)


class TestStorageFailures:
    """Storage errors surface as StorageUnavailable."""

    def test_list_episodes(self):
        repo = ContentRepository(FailingKVStore())
        with pytest.raises(StorageUnavailable):
            repo.list_episodes()

    def test_create_post(self):
        repo = ContentRepository(FailingKVStore())
        with pytest.raises(StorageUnavailable):
            repo.create_blog_post(BlogPostCreate(title="x"), ACTOR)

    def test_each_call_rereads_the_store(self):
        """No caching: a record written behind the repository's back is visible."""
        store = InMemoryKVStore()
        repo = ContentRepository(store)
        assert repo.list_episodes() == []

        store.set("episode_1", {"id": "episode_1", "title": "Direct"})
        assert [e.title for e in repo.list_episodes()] == ["Direct"]
