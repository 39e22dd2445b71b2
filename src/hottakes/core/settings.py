"""Application settings and configuration.

This module defines all configuration options for the Hot Takes application.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Final

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Width of the post.content column; POST_MAX_LENGTH may not exceed it.
POST_CONTENT_COLUMN_LENGTH: Final = 200


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    """

    # Application metadata
    app_name: str = Field(default="Hot Takes", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./hottakes.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    enable_test_reset: bool = Field(default=False, alias="ENABLE_TEST_RESET")

    # JWT authentication settings
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Event bus for post-commit notifications
    event_bus_backend: str = Field(default="memory", alias="EVENT_BUS_BACKEND")
    redis_url: str = Field(default="redis://localhost:6379", alias="REDIS_URL")
    event_channel_prefix: str = Field(default="hottakes", alias="EVENT_CHANNEL_PREFIX")

    # Voting
    vote_conflict_max_attempts: int = Field(
        default=3,
        ge=1,
        alias="VOTE_CONFLICT_MAX_ATTEMPTS",
    )

    # Feed pagination
    feed_page_size: int = Field(default=20, ge=1, alias="FEED_PAGE_SIZE")
    feed_max_page_size: int = Field(default=100, ge=1, alias="FEED_MAX_PAGE_SIZE")

    # Content limits
    post_min_length: int = Field(default=10, ge=1, alias="POST_MIN_LENGTH")
    post_max_length: int = Field(
        default=POST_CONTENT_COLUMN_LENGTH,
        ge=1,
        le=POST_CONTENT_COLUMN_LENGTH,
        alias="POST_MAX_LENGTH",
    )
    mod_message_max_length: int = Field(default=500, ge=1, alias="MOD_MESSAGE_MAX_LENGTH")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling.

        Converts asyncpg URLs to psycopg for synchronous database operations
        like Alembic migrations.
        """
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()  # type: ignore[call-arg]
