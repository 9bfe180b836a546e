"""
Platform Client - Configuration Settings
API endpoint, credentials, HTTP timeouts and logging level.
"""

from functools import lru_cache
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Platform API client settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ── API Endpoint ──────────────────────────────────────────────────
    api_url: str = Field(default="https://api.platform.sh/api", alias="PLATFORM_API_URL")
    api_token: Optional[str] = Field(default=None, alias="PLATFORM_API_TOKEN")

    # ── HTTP Transport ────────────────────────────────────────────────
    http_timeout: float = Field(default=30.0, alias="PLATFORM_HTTP_TIMEOUT")
    user_agent: str = Field(default="platform-client-python/0.1.0", alias="PLATFORM_USER_AGENT")

    # ── Logging ───────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="PLATFORM_LOG_LEVEL")

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("http_timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("PLATFORM_HTTP_TIMEOUT must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        level = v.upper()
        if level not in allowed:
            raise ValueError(f"Unknown log level '{v}', expected one of {allowed}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
