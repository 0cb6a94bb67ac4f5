"""
Application Settings.

Centralized configuration using Pydantic Settings with environment variable loading.

Production Mode:
    When app_env="production", additional validations apply:
    - debug must be False
    - cors_allowed_origins cannot be ["*"]
    - the supabase key-value backend must be selected and configured
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Supabase (key-value table + Auth)
    # -------------------------------------------------------------------------
    supabase_url: str | None = Field(default=None, description="Supabase project URL")
    supabase_service_role_key: SecretStr | None = Field(
        default=None,
        description="Supabase service role key (server-side only)",
    )
    supabase_anon_key: SecretStr | None = Field(
        default=None,
        description="Supabase anon key used by the public site for auth routes",
    )

    # -------------------------------------------------------------------------
    # Key-Value Store
    # -------------------------------------------------------------------------
    kv_backend: Literal["supabase", "memory"] = Field(
        default="supabase",
        description="Key-value backend. 'memory' is for local development and tests.",
    )
    kv_table: str = Field(
        default="kv_store",
        description="Supabase table holding key/value records",
    )
    storage_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for transient storage transport errors",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (exposes error detail in 500 responses)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log renderer",
    )
    api_prefix: str = Field(
        default="/api",
        description="Path prefix for every route of the content service",
    )

    # -------------------------------------------------------------------------
    # Content behaviour
    # -------------------------------------------------------------------------
    degrade_public_reads: bool = Field(
        default=False,
        description=(
            "Answer public reads with an empty list / default profile instead of "
            "a 500 when storage is unavailable"
        ),
    )
    default_contact_email: str = Field(
        default="hello@example.com",
        description="Notification address used when the profile has no email",
    )

    # -------------------------------------------------------------------------
    # CORS Settings
    # -------------------------------------------------------------------------
    cors_allowed_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"],
        description="Allowed CORS origins. Use ['*'] for development only.",
    )
    cors_allow_credentials: bool = Field(
        default=True,
        description="Allow credentials in CORS requests",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production settings are secure."""
        if self.app_env == "production":
            errors = []

            if self.debug:
                errors.append("debug must be False in production")

            if "*" in self.cors_allowed_origins:
                errors.append("cors_allowed_origins cannot contain '*' in production")

            if self.kv_backend != "supabase":
                errors.append("kv_backend must be 'supabase' in production")

            if not self.supabase_url or not self.supabase_service_role_key:
                errors.append("supabase_url and supabase_service_role_key must be set")

            if errors:
                raise ValueError(
                    f"Production configuration errors: {'; '.join(errors)}"
                )

        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()
