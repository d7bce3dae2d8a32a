"""Application configuration."""

import os
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path(".cut-tracker")
    storage_prefix: str = "cut"
    timezone: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="CUT_TRACKER_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("storage_prefix")
    @classmethod
    def _check_storage_prefix(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned or cleaned.startswith(".") or any(c in cleaned for c in "/\\"):
            raise ValueError("storage_prefix must be a plain name")
        return cleaned


def local_today(timezone_name: str | None) -> date:
    """Return today's date in the configured zone, or system local time."""
    if timezone_name is None or not timezone_name.strip():
        return datetime.now().date()
    return datetime.now(tz=ZoneInfo(timezone_name.strip())).date()
