"""Authentication: bearer-token resolution through the identity provider."""

from podsite.auth.identity import (
    Actor,
    AuthSession,
    IdentityProvider,
    SupabaseIdentityProvider,
    build_identity_provider,
    extract_bearer_token,
)

__all__ = [
    "Actor",
    "AuthSession",
    "IdentityProvider",
    "SupabaseIdentityProvider",
    "build_identity_provider",
    "extract_bearer_token",
]
