"""
Application settings.

Values are read from the environment (prefix ``GBIF_NAMES_``) or a local
``.env`` file. The GBIF base URL lives here and is handed to the fetcher
explicitly, so tests and callers can point at another host without
touching module state.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.gbif.org/v1"
DEFAULT_USER_AGENT = "gbif-names/0.1 (python-requests)"


class Settings(BaseSettings):
    """Runtime configuration for the GBIF name lookup client."""

    model_config = SettingsConfigDict(
        env_prefix="GBIF_NAMES_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "gbif-names"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "WARNING"

    gbif_base_url: str = Field(default=DEFAULT_BASE_URL, description="GBIF API root")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    user_agent: str = DEFAULT_USER_AGENT


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
