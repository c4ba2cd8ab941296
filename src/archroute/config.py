"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ARCHROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Architecture Route Planner API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for generated route outputs.")
    osrm_base_url: Optional[str] = Field(
        default=None,
        description="Base URL for the OSRM routing service (e.g., https://router.project-osrm.org).",
    )
    osrm_max_retries: int = Field(default=3, ge=0)
    osrm_backoff_seconds: float = Field(default=1.0, ge=0.0)
    osrm_timeout_seconds: float = Field(default=30.0, gt=0.0)
    walking_speed_kmh: float = Field(
        default=4.0,
        gt=0.0,
        description="Assumed walking speed used for route duration estimates.",
    )
    dwell_minutes_per_stop: float = Field(
        default=20.0,
        ge=0.0,
        description="Time spent at each building when estimating route duration.",
    )
    max_points_per_route: int = Field(
        default=25,
        ge=2,
        description="Upper bound on waypoints sent to the road routing service.",
    )
    default_max_points: int = Field(default=8, ge=2)
    building_query_limit: int = Field(default=100, ge=1)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

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
