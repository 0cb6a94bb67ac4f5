"""Identity provider integration.

Sign-in, sign-up and token validation are delegated to Supabase Auth.
The rest of the service only sees an ``Actor`` resolved from a bearer
token, or an ``Unauthorized`` error.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol

import structlog
from supabase import Client, create_client

from podsite.config.settings import Settings
from podsite.core.exceptions import ConfigurationError, Unauthorized, ValidationError
from podsite.store.kv import create_supabase_client

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Actor:
    """An authenticated identity performing a mutating operation."""

    id: str
    email: Optional[str] = None


@dataclass
class AuthSession:
    """Result of a successful email/password sign-in."""

    access_token: str
    user: dict[str, Any] = field(default_factory=dict)


class IdentityProvider(Protocol):
    """Protocol for identity provider implementations."""

    def verify_token(self, token: str) -> Actor: ...

    def sign_in(self, email: str, password: str) -> AuthSession: ...

    def sign_up(self, email: str, password: str, name: str) -> dict[str, Any]: ...


def _user_to_dict(user: Any) -> dict[str, Any]:
    if user is None:
        return {}
    if hasattr(user, "model_dump"):
        return user.model_dump(mode="json")
    return dict(user)


class SupabaseIdentityProvider:
    """
    Supabase Auth backed identity provider.

    ``admin_client`` must be created with the service role key (needed for
    ``auth.admin.create_user``). Sign-in runs on a fresh client from
    ``session_client_factory`` because a successful sign-in stores the user
    session on the client it ran on.
    """

    def __init__(
        self,
        admin_client: Client,
        session_client_factory: Callable[[], Client],
    ):
        self._admin = admin_client
        self._session_client_factory = session_client_factory

    def verify_token(self, token: str) -> Actor:
        try:
            response = self._admin.auth.get_user(token)
        except Exception as e:
            logger.warning("token_validation_failed", error_type=type(e).__name__, error=str(e))
            raise Unauthorized("Invalid or expired token", reason=str(e)) from e

        user = getattr(response, "user", None)
        if user is None or not getattr(user, "id", None):
            logger.warning("token_validation_failed", error="no user for token")
            raise Unauthorized("User not found")

        return Actor(id=str(user.id), email=getattr(user, "email", None))

    def sign_in(self, email: str, password: str) -> AuthSession:
        client = self._session_client_factory()
        try:
            response = client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except Exception as e:
            logger.info("login_failed", email=email, error=str(e))
            raise Unauthorized(str(e) or "Invalid login credentials") from e

        session = getattr(response, "session", None)
        if session is None or not session.access_token:
            raise Unauthorized("Invalid login credentials")

        logger.info("login_succeeded", email=email)
        return AuthSession(
            access_token=session.access_token,
            user=_user_to_dict(getattr(response, "user", None)),
        )

    def sign_up(self, email: str, password: str, name: str) -> dict[str, Any]:
        try:
            # No mail server is configured, so the address is confirmed up front.
            response = self._admin.auth.admin.create_user(
                {
                    "email": email,
                    "password": password,
                    "user_metadata": {"name": name},
                    "email_confirm": True,
                }
            )
        except Exception as e:
            logger.info("signup_failed", email=email, error=str(e))
            raise ValidationError(str(e) or "Signup failed") from e

        logger.info("signup_succeeded", email=email)
        return _user_to_dict(getattr(response, "user", None))


def build_identity_provider(settings: Settings, admin_client: Optional[Client] = None) -> SupabaseIdentityProvider:
    """Build the Supabase identity provider from settings."""
    admin = admin_client or create_supabase_client(settings)
    session_key = settings.supabase_anon_key or settings.supabase_service_role_key
    if session_key is None:
        raise ConfigurationError("SUPABASE_ANON_KEY is not set", config_key="supabase_anon_key")

    def session_client() -> Client:
        return create_client(settings.supabase_url, session_key.get_secret_value())

    return SupabaseIdentityProvider(admin, session_client)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header.

    Returns None when the header is missing or carries no token.
    """
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]
