"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="GIST_BACKUP_")

    app_name: str = "gist-backup"
    debug: bool = False

    # GitHub API settings
    github_api_base_url: str = "https://api.github.com"
    github_api_timeout: float = 30.0
    github_token: str | None = None

    # Pagination
    per_page: int = Field(default=100, ge=1, le=100)


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
