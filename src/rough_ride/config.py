"""Centralized settings for the rough-ride backend."""
from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from rough_ride.core.models import RoughnessConfig


class Settings(BaseSettings):
    model_config = {"env_prefix": "ROUGH_RIDE_"}

    # User-adjustable roughness tuning (settings screen)
    sensitivity: float = Field(default=1.0, ge=0.5, le=3.0)
    speed_influence: float = Field(default=0.5, ge=0.0, le=1.0)

    # Point markers: continuous gradient or the older four-bucket palette
    marker_palette: Literal["gradient", "bucket"] = "gradient"

    # Redis: empty string means disabled (graceful fallback)
    redis_url: str = ""
    ttl_route_colors: int = 3600      # 1 h, colored segments per snapshot

    # In-process memo of recent recomputations
    memo_max_entries: int = 64

    # Sensor feed
    motion_queue_size: int = 4096

    def roughness_config(self) -> RoughnessConfig:
        """Snapshot the tunables for one recomputation."""
        return RoughnessConfig(
            sensitivity=self.sensitivity,
            speed_influence=self.speed_influence,
        )


settings = Settings()
