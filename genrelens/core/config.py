from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
    )

    SPOTIFY_TOKEN: str | None = None
    SPOTIFY_API_URL: str = "https://api.spotify.com/v1"
    SPOTIFY_HOSTNAME: str = "open.spotify.com"
    SPOTIFY_TIMEOUT: float = 10.0
    # Attempts per request; 1 means a single attempt with no retry
    SPOTIFY_MAX_RETRIES: int = 1

    # Cap on concurrent artist lookups so one big playlist does not trip rate limits
    ARTIST_LOOKUP_CONCURRENCY: int = 10
    # When true, failed artist lookups are skipped and counted instead of aborting
    SKIP_FAILED_ARTISTS: bool = False

    PORT: int = 8000
    APP_ENV: Literal["development", "production"] = "production"


settings = Settings()
