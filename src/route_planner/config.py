"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTE_PLANNER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Route Planner API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for persisted run outputs.")
    api_key: Optional[str] = Field(
        default=None,
        description="API key sent in the 'apiKey' header of every remote request.",
    )
    api_base_url: str = Field(
        default="https://api.myptv.com",
        description="Base URL of the geocoding and route optimization services.",
    )
    geocoding_path: str = "geocoding/v1"
    route_optimization_path: str = "routeoptimization/v1"
    tweaks_to_objective: str = Field(default="IGNORE_MINIMIZATION_OF_NUMBER_OF_ROUTES")
    request_timeout_seconds: float = Field(default=30.0, gt=0.0)
    poll_interval_seconds: float = Field(
        default=0.5,
        gt=0.0,
        description="Delay between two optimization progress requests.",
    )
    vehicle_profiles: tuple[str, ...] = Field(
        default=(
            "EUR_TRAILER_TRUCK",
            "EUR_TRUCK_40T",
            "EUR_TRUCK_11_99T",
            "EUR_TRUCK_7_49T",
            "EUR_VAN",
            "EUR_CAR",
        ),
        description="Vehicle profiles a user may pick when starting an optimization.",
    )
    timezone: str = Field(
        default="UTC",
        description="Timezone used for opening intervals and displayed arrival times.",
    )
    persist_results: bool = False
    raster_tiles_url: str = Field(
        default="https://api.myptv.com/rastermaps/v1/image-tiles/{z}/{x}/{y}?size={tileSize}&style=silica",
    )
    map_center: tuple[float, float] = (52.5, 13.4)
    map_zoom: int = Field(default=13, ge=0)
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("api_base_url", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("frontend_allowed_origins", "vehicle_profiles", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
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
