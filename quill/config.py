"""Application configuration."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class ElasticsearchSettings(BaseModel):
    """Elasticsearch connection and index configuration."""

    hosts: list[str] = ["http://localhost:9200"]

    # Optional credentials (api_key takes precedence over basic auth)
    api_key: str | None = None
    username: str | None = None
    password: str | None = None

    # Index names, one logical partition per deployment
    comments_index: str = "blog-comments"
    posts_index: str = "blog-posts"

    # Applied to every store call
    request_timeout: float = 10.0

    # Client-side retries for transport failures and timeouts
    max_retries: int = 3
    retry_on_timeout: bool = True


class CommentSettings(BaseModel):
    """Comment engine tuning."""

    # Validity window of a scroll cursor, renewed on every page
    scroll_keep_alive: str = "10s"
    scroll_page_size: int = 100

    # Attempts at the read-modify-write cycle before giving up on a thread
    write_conflict_retries: int = 5

    # Stats
    recent_comments_size: int = 10
    top_posts_size: int = 5
    default_interval: str = "1d"


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

    Set environment variables to override, using ``__`` for nested values:

        ELASTICSEARCH__HOSTS='["http://es:9200"]'
        ELASTICSEARCH__COMMENTS_INDEX=my-blog-comments
        COMMENTS__SCROLL_PAGE_SIZE=500
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    environment: Literal["test", "development", "staging", "production"] = "development"
    debug: bool = False

    # Git commit SHA (loaded from version.txt file or defaults to "unknown")
    git_sha: str = "unknown"

    host: str = "0.0.0.0"
    port: int = 8000

    # Blog frontends allowed to call the API from a browser
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    elasticsearch: ElasticsearchSettings = ElasticsearchSettings()
    comments: CommentSettings = CommentSettings()
    observability: ObservabilitySettings = ObservabilitySettings()

    def model_post_init(self, __context) -> None:
        """Load git SHA from version file if it exists."""
        version_file = Path("/app/version.txt")
        if version_file.exists():
            self.git_sha = version_file.read_text().strip() or "unknown"
