"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="NOBETCI_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Nöbetçi Eczane API"
    api_prefix: str = "/api"

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase key with read access to the roster table.",
    )
    pharmacies_table: str = Field(default="pharmacies", description="Table holding the daily roster.")

    timezone: str = Field(
        default="Europe/Istanbul",
        description="IANA zone the roster calendar is published in.",
    )
    cutoff_hour: int = Field(
        default=9,
        ge=0,
        le=23,
        description="Local hour at which the new day's roster takes effect.",
    )
    nearby_default_limit: int = Field(default=5, ge=1)
    nearby_max_limit: int = Field(default=20, ge=1)
    page_size: int = Field(default=1000, ge=1, description="Rows requested per store round-trip.")
    max_rows: int = Field(default=5000, ge=1, description="Hard cap on rows read for a single query.")
    region_max_workers: int = Field(default=8, ge=1)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
