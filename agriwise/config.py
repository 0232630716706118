"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """Central configuration — all values sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── Redis ───────────────────────────────────────────────────────────────
    # Empty disables the proxy rate limiter.
    redis_url: str = ""

    # ── Auth ────────────────────────────────────────────────────────────────
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60

    # ── Rate limiting ─────────────────────────────────────────────────────
    rate_limit_proxy_per_minute: int = 30

    # ── AI chat gateway ─────────────────────────────────────────────────────
    chat_gateway_url: str = "https://ai.gateway.lovable.dev/v1/chat/completions"
    chat_gateway_api_key: str = ""
    chat_model: str = "google/gemini-3-flash-preview"
    chat_timeout_seconds: float = 60.0
    chat_max_messages: int = 50
    chat_max_content_chars: int = 4000

    # ── Weather ─────────────────────────────────────────────────────────────
    weather_base_url: str = "https://api.open-meteo.com/v1/forecast"
    weather_timeout_seconds: float = 10.0

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
