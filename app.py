"""
app.py: FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the repository and booking service, registers routers, and runs
startup initialization.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from backend.controllers.booking_controller import router as booking_router
from backend.repository.data_repository import (
    DataRepository,
    SqliteBookingRepository,
    SqliteRoomRepository,
)
from backend.services.booking_service import BookingService
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, seed: bool = True) -> FastAPI:
    """
    Build and wire the FastAPI application.

    Every dependency is created here and exposed through app.state so the
    controller layer never constructs storage on its own.
    """
    settings = settings or get_settings()

    # --- Repository (SQLite connection factory) ---
    repository = DataRepository(settings)

    # --- Services (business logic, storage reached through ports) ---
    booking_service = BookingService(
        room_repository=SqliteRoomRepository(repository),
        booking_repository=SqliteBookingRepository(repository),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _startup(app, seed=seed)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.include_router(booking_router)

    app.state.settings = settings
    app.state.repository = repository
    app.state.booking_service = booking_service

    return app


def _startup(app: FastAPI, seed: bool = True) -> None:
    """
    Idempotent startup sequence. Safe to re-run on server restarts.

    Schema must exist before seeding; seeding is skipped when rooms exist.
    """
    repository: DataRepository = app.state.repository

    logger.info("Startup: initializing database schema")
    repository.initialize_database()

    if seed:
        logger.info("Startup: seeding demo rooms and bookings")
        repository.seed_demo_data()

    logger.info("Startup complete, system ready")


# Module-level app object for uvicorn
app = create_app()
