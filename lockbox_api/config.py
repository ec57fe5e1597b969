"""
Configuration

Service settings loaded from environment variables (prefix ``LOCKBOX_``)
and an optional ``.env`` file.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .totp.generator import DEFAULT_DIGITS, DEFAULT_STEP_SECONDS


class Settings(BaseSettings):
    """Lockbox API settings."""

    model_config = SettingsConfigDict(
        env_prefix="LOCKBOX_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # CORS (lockbox dashboards call from arbitrary origins)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Include stored records and timings in heartbeat/status responses
    debug_payloads: bool = False

    # Code parameters shared with the lockbox firmware
    totp_step_seconds: int = Field(default=DEFAULT_STEP_SECONDS, gt=0)
    totp_digits: int = Field(default=DEFAULT_DIGITS, gt=0, le=9)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
