"""Application configuration."""

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: Literal["file", "supabase"] = "file"
    preferences_path: Path = Path("milk_tracker_preferences.json")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    household_id: str = "default"
    preferences_table: str = "preferences"
    default_daily_quantity: int = Field(default=1, ge=0)
    default_price_per_liter: int = Field(default=50, ge=0)
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
