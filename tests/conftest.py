"""
Pytest Configuration and Shared Fixtures.

- memory_store: empty InMemoryKVStore
- clock: deterministic clock advancing one second per call
- repository: ContentRepository over memory_store and clock
- identity: StaticIdentityProvider with one admin token
- app / client: FastAPI app wired to the fixtures above
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from podsite.api.dependencies import get_identity_provider, get_kv_store, get_repository
from podsite.api.main import create_app
from podsite.auth.identity import Actor, AuthSession
from podsite.config.settings import Settings, get_settings
from podsite.content.repository import ContentRepository
from podsite.core.exceptions import StorageUnavailable, Unauthorized, ValidationError
from podsite.store.kv import InMemoryKVStore

ADMIN_TOKEN = "admin-token"
ADMIN_ID = "user-admin"


class StepClock:
    """Clock returning a new instant on every call."""

    def __init__(
        self,
        start: datetime = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        step: timedelta = timedelta(seconds=1),
    ):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


class StaticIdentityProvider:
    """Identity provider backed by fixed tokens and users."""

    def __init__(self, tokens: dict[str, Actor], passwords: Optional[dict[str, str]] = None):
        self.tokens = tokens
        self.passwords = passwords or {}
        self.signups: list[dict[str, Any]] = []

    def verify_token(self, token: str) -> Actor:
        if token not in self.tokens:
            raise Unauthorized("Invalid or expired token")
        return self.tokens[token]

    def sign_in(self, email: str, password: str) -> AuthSession:
        if self.passwords.get(email) != password:
            raise Unauthorized("Invalid login credentials")
        return AuthSession(access_token=ADMIN_TOKEN, user={"id": ADMIN_ID, "email": email})

    def sign_up(self, email: str, password: str, name: str) -> dict[str, Any]:
        if email in self.passwords:
            raise ValidationError("User already registered")
        self.passwords[email] = password
        user = {"id": f"user-{len(self.signups) + 1}", "email": email, "user_metadata": {"name": name}}
        self.signups.append(user)
        return user


class FailingKVStore:
    """Store whose every call fails like an unreachable backend."""

    def get(self, key):
        raise StorageUnavailable("get", "connection refused")

    def set(self, key, value):
        raise StorageUnavailable("set", "connection refused")

    def delete(self, key):
        raise StorageUnavailable("delete", "connection refused")

    def get_by_prefix(self, prefix):
        raise StorageUnavailable("get_by_prefix", "connection refused")


@pytest.fixture
def memory_store() -> InMemoryKVStore:
    """Fresh in-memory store for each test."""
    return InMemoryKVStore()


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def repository(memory_store, clock) -> ContentRepository:
    return ContentRepository(memory_store, clock=clock)


@pytest.fixture
def identity() -> StaticIdentityProvider:
    return StaticIdentityProvider(
        tokens={ADMIN_TOKEN: Actor(id=ADMIN_ID, email="host@example.com")},
        passwords={"host@example.com": "correct-horse"},
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, kv_backend="memory")


@pytest.fixture
def app(settings, memory_store, identity, clock):
    """App wired to the in-memory store, the step clock and the static identity provider."""
    application = create_app(settings)

    def repository_with_clock(store=Depends(get_kv_store)) -> ContentRepository:
        return ContentRepository(store, clock=clock)

    application.dependency_overrides[get_settings] = lambda: settings
    application.dependency_overrides[get_kv_store] = lambda: memory_store
    application.dependency_overrides[get_identity_provider] = lambda: identity
    application.dependency_overrides[get_repository] = repository_with_clock
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
