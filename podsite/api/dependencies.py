"""FastAPI dependency injection providers.

Tests replace ``get_kv_store`` and ``get_identity_provider`` through
``app.dependency_overrides``.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header
from supabase import Client

from podsite.auth.identity import (
    Actor,
    IdentityProvider,
    build_identity_provider,
    extract_bearer_token,
)
from podsite.config.settings import Settings, get_settings
from podsite.content.repository import ContentRepository
from podsite.core.exceptions import Unauthorized
from podsite.store.kv import KVStore, build_kv_store, create_supabase_client

logger = structlog.get_logger(__name__)

# Global instances for singleton pattern
_supabase_client: Optional[Client] = None
_kv_store: Optional[KVStore] = None
_identity_provider: Optional[IdentityProvider] = None


def get_supabase(settings: Settings = Depends(get_settings)) -> Client:
    """
    Get the service-role Supabase client.

    Uses a singleton pattern to reuse the same client across requests.
    """
    global _supabase_client

    if _supabase_client is None:
        _supabase_client = create_supabase_client(settings)

    return _supabase_client


def get_kv_store(settings: Settings = Depends(get_settings)) -> KVStore:
    """Get the configured key-value store."""
    global _kv_store

    if _kv_store is None:
        client = get_supabase(settings) if settings.kv_backend == "supabase" else None
        _kv_store = build_kv_store(settings, client=client)

    return _kv_store


def get_identity_provider(settings: Settings = Depends(get_settings)) -> IdentityProvider:
    """Get the Supabase Auth identity provider."""
    global _identity_provider

    if _identity_provider is None:
        _identity_provider = build_identity_provider(settings, admin_client=get_supabase(settings))

    return _identity_provider


def get_repository(store: KVStore = Depends(get_kv_store)) -> ContentRepository:
    """A repository per request; it holds no state of its own."""
    return ContentRepository(store)


def get_current_actor(
    authorization: Optional[str] = Header(None),
    identity: IdentityProvider = Depends(get_identity_provider),
) -> Actor:
    """
    Resolve the bearer token to an actor.

    Raises:
        Unauthorized: No token presented, or the identity provider rejects it.
    """
    token = extract_bearer_token(authorization)
    if not token:
        raise Unauthorized("Unauthorized", reason="missing bearer token")
    return identity.verify_token(token)


def reset_dependencies() -> None:
    """
    Reset all global dependency instances.

    Useful for testing or application shutdown.
    """
    global _supabase_client, _kv_store, _identity_provider
    _supabase_client = None
    _kv_store = None
    _identity_provider = None
