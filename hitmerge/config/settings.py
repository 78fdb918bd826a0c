"""
Settings - Library configuration using Pydantic Settings.

Loads from environment variables (``HITMERGE_`` prefix) and .env files.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings."""

    # Search service credentials
    app_id: str = ""
    api_key: str = ""

    # Overrides the default https://{app_id}-dsn.algolia.net host
    host: str | None = None

    # Transport
    timeout_seconds: float = 30.0
    max_attempts: int = 3

    # Logging
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="HITMERGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def base_url(self) -> str:
        """Resolved service base URL."""
        if self.host:
            return self.host.rstrip("/")
        return f"https://{self.app_id}-dsn.algolia.net"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
