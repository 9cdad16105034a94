"""HTTP controller layer for rooms, bookings and occupancy."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from backend.controllers.dependencies import get_app_settings, get_booking_service
from backend.domain.constraints import InvalidDateRangeError
from backend.domain.models import Booking, Room
from backend.services.booking_service import BookingService
from backend.utils.config import Settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)

router = APIRouter(tags=["bookings"])


class RoomResponse(BaseModel):
    room_id: int
    description: str

    @classmethod
    def from_domain(cls, room: Room) -> "RoomResponse":
        return cls(room_id=room.room_id, description=room.description)


class CreateBookingRequest(BaseModel):
    """Input DTO; room and active flag are decided by the service."""

    start_date: date
    end_date: date
    customer_id: int = Field(gt=0)


class BookingResponse(BaseModel):
    booking_id: int
    room_id: int | None
    customer_id: int
    start_date: date
    end_date: date
    is_active: bool

    @classmethod
    def from_domain(cls, booking: Booking) -> "BookingResponse":
        return cls(
            booking_id=booking.booking_id,
            room_id=booking.room_id,
            customer_id=booking.customer_id,
            start_date=booking.start_date,
            end_date=booking.end_date,
            is_active=booking.is_active,
        )


class AvailableRoomResponse(BaseModel):
    room_id: int


@router.get("/rooms", response_model=list[RoomResponse])
async def list_rooms(
    service: BookingService = Depends(get_booking_service),
) -> list[RoomResponse]:
    return [RoomResponse.from_domain(room) for room in service.list_rooms()]


@router.get("/rooms/available", response_model=AvailableRoomResponse)
async def find_available_room(
    start_date: date = Query(...),
    end_date: date = Query(...),
    service: BookingService = Depends(get_booking_service),
) -> AvailableRoomResponse:
    """Return the room a booking would get, or -1 when none is free."""
    try:
        room_id = service.find_available_room(start_date, end_date)
    except InvalidDateRangeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return AvailableRoomResponse(room_id=room_id)


@router.get("/bookings", response_model=list[BookingResponse])
async def list_bookings(
    service: BookingService = Depends(get_booking_service),
) -> list[BookingResponse]:
    return [BookingResponse.from_domain(booking) for booking in service.list_bookings()]


@router.get("/bookings/fully-occupied", response_model=list[date])
async def get_fully_occupied_dates(
    start_date: date = Query(...),
    end_date: date = Query(...),
    service: BookingService = Depends(get_booking_service),
    settings: Settings = Depends(get_app_settings),
) -> list[date]:
    max_days = settings.occupancy_query_max_days
    if (end_date - start_date).days + 1 > max_days:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Occupancy queries are limited to {max_days} days",
        )
    try:
        return service.get_fully_occupied_dates(start_date, end_date)
    except InvalidDateRangeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


@router.get("/bookings/{booking_id}", response_model=BookingResponse)
async def get_booking(
    booking_id: int,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    booking = service.get_booking(booking_id)
    if booking is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Booking {booking_id} not found",
        )
    return BookingResponse.from_domain(booking)


@router.post(
    "/bookings",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    payload: CreateBookingRequest,
    service: BookingService = Depends(get_booking_service),
) -> BookingResponse:
    booking = Booking(
        start_date=payload.start_date,
        end_date=payload.end_date,
        customer_id=payload.customer_id,
    )
    try:
        created = service.create_booking(booking)
    except InvalidDateRangeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except Exception as exc:  # pragma: no cover - defensive fallback
        logger.exception("Unexpected booking failure")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create booking",
        ) from exc

    if not created:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="The booking could not be created. All rooms are occupied.",
        )
    return BookingResponse.from_domain(booking)
