"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BACKEND_API_URL = "https://carecloud-api-423331836390.us-west2.run.app"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Upstream backend API
    backend_api_key: str = ""
    backend_api_url: str = DEFAULT_BACKEND_API_URL
    backend_timeout_seconds: float = Field(default=30.0, gt=0)
    backend_healthcheck_enabled: bool = False

    # Authorization
    enforce_permissions: bool = True

    # Organization mapping database
    database_url: str | None = None

    # Logging
    log_level: str = "INFO"

    @property
    def backend_base_url(self) -> str:
        """Backend base URL without a trailing slash."""
        return (self.backend_api_url or DEFAULT_BACKEND_API_URL).rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
