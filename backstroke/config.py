"""Pydantic Settings model for application configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from backstroke.utils.constants import DEFAULT_BOT_USERNAME, DEFAULT_GITHUB_API_TIMEOUT, DEFAULT_GITHUB_API_URL


class Settings(BaseSettings):
    """Environment variable settings for the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Generic application-wide settings
    DEBUG: bool = False

    # GitHub API settings
    GITHUB_API_URL: str = DEFAULT_GITHUB_API_URL
    GITHUB_API_TIMEOUT: float = DEFAULT_GITHUB_API_TIMEOUT

    # Bot identity settings
    GITHUB_TOKEN: str | None = None
    GITHUB_BOT_USERNAME: str = DEFAULT_BOT_USERNAME


settings = Settings()
