"""Application configuration management."""

from pydantic import AnyUrl, ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Google OAuth (Gmail read-only scan)
    google_client_id: str
    google_client_secret: str
    google_redirect_uri: str

    # Database
    database_url: AnyUrl

    # Security
    cookie_secure: bool = Field(
        default=True,
        description="Set to False for local HTTP development",
    )

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
