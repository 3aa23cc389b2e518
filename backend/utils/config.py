"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from backend.domain.constraints import OccupancyPolicy


def _env_int(name: str, default: int) -> int:
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    max_adults_per_room: int
    max_guests_per_room: int
    family_exception_adults: int

    def occupancy_policy(self) -> OccupancyPolicy:
        return OccupancyPolicy(
            max_adults_per_room=self.max_adults_per_room,
            max_guests_per_room=self.max_guests_per_room,
            family_exception_adults=self.family_exception_adults,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings once per process; call ``cache_clear`` to re-read."""
    return Settings(
        app_name=os.getenv("APP_NAME", "Guest Room Splitter"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        max_adults_per_room=_env_int("MAX_ADULTS_PER_ROOM", 2),
        max_guests_per_room=_env_int("MAX_GUESTS_PER_ROOM", 3),
        family_exception_adults=_env_int("FAMILY_EXCEPTION_ADULTS", 1),
    )
