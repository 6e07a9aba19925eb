"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from .env file (``NOTES_`` prefix)."""

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "NOTES_",
        "extra": "ignore",
    }

    # Storage
    storage_backend: Literal["file", "redis", "memory"] = "file"
    storage_path: Path = Path("notes_data.json")
    storage_key: str = "notes_app_v1"
    storage_quota_bytes: int = 5 * 1024 * 1024  # same ballpark as browser localStorage

    # Redis
    redis_url: str = "redis://localhost:6379"

    # Notes
    details_max_chars: int = 500
    validate_on_load: bool = False

    # Logging
    log_level: str = "INFO"


settings = Settings()
