"""Application settings loaded from environment variables via pydantic-settings."""

from enum import StrEnum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LogFormat(StrEnum):
    json = "json"
    console = "console"


class Settings(BaseSettings):
    """Central configuration; all values are sourced from env vars or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── API ─────────────────────────────────────────────────────────────────
    api_prefix: str = "/api/v1"

    # ── Lab-test reminders ──────────────────────────────────────────────────
    soil_test_interval_days: int = Field(default=730, gt=0)
    petiole_test_interval_days: int = Field(default=90, gt=0)

    # ── Fertilizer plan timing ──────────────────────────────────────────────
    plan_follow_up_months: int = Field(default=2, ge=1)
    plan_maintenance_months: int = Field(default=3, ge=1)

    # ── Observability ───────────────────────────────────────────────────────
    log_level: str = "info"
    log_format: LogFormat = LogFormat.json


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance (cached after first call)."""
    return Settings()
