"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseModel):
    """Remote REST API configuration."""

    # Base URL of the crowdfunding backend (no trailing slash)
    base_url: str = "http://localhost:3001"

    # Bearer token of the signed-in user (None for anonymous browsing)
    token: str | None = None

    # Per-request timeout in seconds
    timeout: float = 30.0


class CommentSettings(BaseModel):
    """Comment thread configuration."""

    # Top-level comments fetched per page ("load more" step)
    page_size: int = Field(default=10, ge=1, le=100)

    # Replies fetched at once when a thread is expanded
    reply_page_size: int = Field(default=50, ge=1, le=100)

    # Deeper replies render at this indentation level
    max_visual_depth: int = Field(default=6, ge=1)


class SearchSettings(BaseModel):
    """Campaign search configuration."""

    # Number of recent searches remembered
    recent_limit: int = Field(default=5, ge=1)

    # File the recent searches are persisted to
    recent_path: Path = Path.home() / ".pledge" / "recent_searches.json"


class ObservabilitySettings(BaseModel):
    """Observability configuration for Logfire."""

    # Logfire API token (optional - if not set, logs only go to console)
    # Can be set via OBSERVABILITY__LOGFIRE_TOKEN env var
    logfire_token: str | None = None

    # Whether to send telemetry to Logfire cloud
    # If None, will auto-determine: sends if token is present, otherwise console-only
    send_to_logfire: bool | None = None


class Settings(BaseSettings):
    """Application settings.

    Set environment variables to override, nested values use ``__``:

        API__BASE_URL=https://api.pledge.example
        API__TOKEN=eyJhbGciOi...
        COMMENTS__PAGE_SIZE=20
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # Allows API__BASE_URL syntax
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Nested settings
    api: APISettings = APISettings()
    comments: CommentSettings = CommentSettings()
    search: SearchSettings = SearchSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
