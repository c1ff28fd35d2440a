"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    jwt_secret: str
    token_ttl_days: int = 7
    bcrypt_rounds: int = 12
    fdc_api_key: str | None = None
    fdc_base_url: str = "https://api.nal.usda.gov/fdc/v1"
    fdc_timeout_seconds: float = 10.0
    food_search_ttl_seconds: int = 300
    food_search_cache_size: int = 256
    cors_origins: str = "*"
    host: str = "127.0.0.1"
    port: int = 4000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str | None) -> list[str]:
    """Parse allowed CORS origins from env."""
    if raw is None:
        return ["*"]
    cleaned = raw.strip()
    if cleaned in {"", "*"}:
        return ["*"]
    return [origin.strip() for origin in cleaned.split(",") if origin.strip()]
