"""Configuration management for Liked Sync."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Spotify caps both GET /me/tracks pages and PUT /me/tracks bodies at 50 IDs
SPOTIFY_MAX_IDS_PER_REQUEST = 50


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Spotify OAuth
    spotify_client_id: str = ""
    spotify_client_secret: str = ""
    spotify_redirect_uri: str = "http://localhost:3000/callback"

    # Spotify endpoints
    spotify_api_base: str = "https://api.spotify.com/v1"
    spotify_accounts_base: str = "https://accounts.spotify.com"

    # Sync tuning
    page_size: int = Field(default=SPOTIFY_MAX_IDS_PER_REQUEST, ge=1, le=SPOTIFY_MAX_IDS_PER_REQUEST)
    write_batch_size: int = Field(default=SPOTIFY_MAX_IDS_PER_REQUEST, ge=1, le=SPOTIFY_MAX_IDS_PER_REQUEST)
    pacing_delay_seconds: float = Field(default=0.1, ge=0)

    # HTTP
    http_timeout: float = 30.0

    # Logging
    log_level: str = "INFO"

    @property
    def has_client_credentials(self) -> bool:
        """Check if Spotify app credentials are configured."""
        return bool(self.spotify_client_id and self.spotify_client_secret)

    @property
    def token_url(self) -> str:
        """Get the OAuth token endpoint."""
        return f"{self.spotify_accounts_base}/api/token"

    @property
    def authorize_url(self) -> str:
        """Get the OAuth authorization endpoint."""
        return f"{self.spotify_accounts_base}/authorize"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
