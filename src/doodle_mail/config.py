"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    allowed_origins: str = "*"
    room_code_length: int = 4
    room_code_max_attempts: int = 6
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allowed_origins(raw: str | None) -> list[str]:
    """Parse space-separated CORS origins from env."""
    if raw is None:
        return ["*"]
    origins = [chunk.strip() for chunk in raw.split() if chunk.strip()]
    return origins or ["*"]
