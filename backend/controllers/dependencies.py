"""Shared FastAPI dependency providers for controller layer."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from backend.repository.data_repository import (
    DataRepository,
    SqliteBookingRepository,
    SqliteRoomRepository,
)
from backend.services.booking_service import BookingService
from backend.utils.config import Settings, get_settings


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_booking_service(request: Request) -> BookingService:
    service = getattr(request.app.state, "booking_service", None)
    if service is None:
        repository: DataRepository | None = getattr(request.app.state, "repository", None)
        if repository is not None:
            service = BookingService(
                room_repository=SqliteRoomRepository(repository),
                booking_repository=SqliteBookingRepository(repository),
            )
            request.app.state.booking_service = service
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Booking service is not initialized",
        )
    return service
