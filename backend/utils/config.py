"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_tuple(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    log_level: str
    database_path: Path
    seed_room_descriptions: tuple[str, ...]
    seed_customer_count: int
    seed_fully_occupied_start_offset_days: int
    seed_fully_occupied_end_offset_days: int
    occupancy_query_max_days: int


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call `cache_clear()` to reload."""
    settings = Settings(
        app_name=os.getenv("APP_NAME", "Hotel Booking Service"),
        app_version=os.getenv("APP_VERSION", "1.0.0"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        database_path=Path(os.getenv("DATABASE_PATH", "data/hotel_booking.db")),
        seed_room_descriptions=_env_tuple("SEED_ROOM_DESCRIPTIONS", ("A", "B", "C")),
        seed_customer_count=_env_int("SEED_CUSTOMER_COUNT", 2),
        seed_fully_occupied_start_offset_days=_env_int(
            "SEED_FULLY_OCCUPIED_START_OFFSET_DAYS", 10
        ),
        seed_fully_occupied_end_offset_days=_env_int(
            "SEED_FULLY_OCCUPIED_END_OFFSET_DAYS", 20
        ),
        occupancy_query_max_days=_env_int("OCCUPANCY_QUERY_MAX_DAYS", 366),
    )
    if settings.seed_fully_occupied_start_offset_days > settings.seed_fully_occupied_end_offset_days:
        raise ValueError("seed fully occupied window start must not be after its end")
    if settings.occupancy_query_max_days <= 0:
        raise ValueError("OCCUPANCY_QUERY_MAX_DAYS must be > 0")
    return settings
