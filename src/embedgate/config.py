"""Application configuration using Pydantic Settings.

Environment variables are automatically mapped to Settings fields.
"""

from functools import lru_cache
from typing import Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from embedgate.registry import default_registry


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Provider ids referenced here are validated against the registry so
    a typo fails at startup instead of silently blocking nothing.
    """

    # --- Logging ---
    embedgate_debug: bool = False

    # --- Placeholder ---
    privacy_policy_url: str = "/privacy-policy"
    embed_locale: Literal["en", "de"] = "en"

    # --- Per-provider settings ---
    # Comma-separated provider ids that should never be blocked
    embed_disabled_types: str = ""
    # JSON object mapping provider id to a custom placeholder message
    embed_custom_messages: dict[str, str] = {}

    # --- Visitor opt-in ---
    embed_cookie_prefix: str = "embed_consent_"

    # --- Consent store ---
    consent_enabled: bool = True
    redis_url: str = ""
    redis_consent_key_prefix: str = "embedgate:consent"

    # --- Network Interface ---
    host: str = "0.0.0.0"
    port: int = 8000

    @model_validator(mode="after")
    def validate_provider_ids(self) -> "Settings":
        """Validate that every configured provider id is registered.

        Raises:
            ValueError: If an unknown provider id is configured

        """
        for provider_id in self.disabled_provider_ids:
            if provider_id not in default_registry:
                msg = f"EMBED_DISABLED_TYPES contains unknown provider: {provider_id}"
                raise ValueError(msg)
        for provider_id in self.embed_custom_messages:
            if provider_id not in default_registry:
                msg = f"EMBED_CUSTOM_MESSAGES contains unknown provider: {provider_id}"
                raise ValueError(msg)
        return self

    @property
    def disabled_provider_ids(self) -> frozenset[str]:
        """Parse the disabled provider list from the settings string."""
        return frozenset(
            s.strip() for s in self.embed_disabled_types.split(",") if s.strip()
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance.

    Uses lru_cache to ensure the .env file is only parsed once
    and all modules share the same settings instance.

    Returns:
        Settings instance with application configuration.

    """
    return Settings()


settings = get_settings()
