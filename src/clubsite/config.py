"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_anon_key: str | None = None
    images_bucket: str = "images"
    documents_bucket: str = "documents"
    winners_bucket: str = "winners"
    profiles_bucket: str = "profiles"
    max_upload_bytes: int = 5 * 1024 * 1024
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def required_buckets(self) -> list[str]:
        """Return the buckets the site stores files in."""
        return [
            self.images_bucket,
            self.documents_bucket,
            self.winners_bucket,
            self.profiles_bucket,
        ]

    @property
    def is_local(self) -> bool:
        """Return True when running on a developer machine."""
        return self.environment == "local"
