"""
Client configuration.

Settings are read from ``NATURALIST_*`` environment variables (or a ``.env``
file) and frozen after construction. Library code never reads the
environment itself: a ``Settings`` instance is passed to ``Client``
explicitly. ``get_settings()`` exists for the CLI.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://www.inaturalist.org"
DEFAULT_USER_AGENT = "naturalist-client/0.1 (https://github.com/mihow/naturalist-client)"


class Settings(BaseSettings):
    """Immutable provider configuration (base address, credentials, timeouts)."""

    model_config = SettingsConfigDict(
        env_prefix="NATURALIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app_name: str = "naturalist"
    app_env: str = "development"
    debug: bool = False

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Provider base address")
    access_token: str | None = Field(default=None, description="OAuth bearer token")
    http_timeout: float = Field(default=30.0, gt=0, description="Per-request timeout (seconds)")
    user_agent: str = DEFAULT_USER_AGENT

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Settings built from the environment, cached for the process."""
    return Settings()
