"""Application settings and configuration.

This module defines all configuration options for the Postboard application.
Settings are loaded from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files.
    The remote store location is optional here so the module imports cleanly;
    it is validated once at startup by ``load_store_config``.
    """

    # Application metadata
    app_name: str = Field(default="Postboard", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Remote store configuration
    store_base_url: str | None = Field(default=None, alias="STORE_BASE_URL")
    mockapi_token: str | None = Field(default=None, alias="MOCKAPI_TOKEN")
    store_timeout_seconds: float = Field(default=10.0, alias="STORE_TIMEOUT_SECONDS")

    # Session cookie settings
    session_secret: str = Field(default="postboard-dev-secret", alias="SESSION_SECRET")
    session_algorithm: str = Field(default="HS256", alias="SESSION_ALGORITHM")
    session_cookie_name: str = Field(default="session", alias="SESSION_COOKIE_NAME")
    session_max_age_seconds: int = Field(
        default=60 * 60 * 24 * 7,
        alias="SESSION_MAX_AGE_SECONDS",
    )

    # Feed and search tuning
    popular_feed_limit: int = Field(default=20, alias="POPULAR_FEED_LIMIT")
    search_page_size: int = Field(default=10, alias="SEARCH_PAGE_SIZE")

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
    def secure_cookies(self) -> bool:
        """Return True when session cookies must only travel over HTTPS."""
        return self.environment.lower() == "production"

    @property
    def resolved_store_url(self) -> str | None:
        """Return the store base URL, deriving it from the mock API token if needed.

        Returns:
            The explicit ``STORE_BASE_URL`` when set, otherwise the MockAPI
            project URL for ``MOCKAPI_TOKEN``, otherwise None.
        """
        if self.store_base_url:
            return self.store_base_url.rstrip("/")
        if self.mockapi_token:
            return f"https://{self.mockapi_token}.mockapi.io/api/v1"
        return None


settings = Settings()
