"""Room allocation and occupancy queries over the room and booking stores."""

from __future__ import annotations

from collections import defaultdict
from datetime import date, timedelta
from typing import Callable, Optional, Sequence

from backend.domain.constraints import (
    as_calendar_date,
    booking_overlaps,
    validate_date_range,
)
from backend.domain.models import NO_ROOM_AVAILABLE, Booking, Room
from backend.repository.interfaces import Repository
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def _active_bookings_by_room(bookings: Sequence[Booking]) -> dict[int, list[Booking]]:
    grouped: dict[int, list[Booking]] = defaultdict(list)
    for booking in bookings:
        if booking.is_active and booking.room_id is not None:
            grouped[booking.room_id].append(booking)
    return grouped


def select_free_room(
    rooms: Sequence[Room],
    bookings_by_room: dict[int, list[Booking]],
    start_date: date,
    end_date: date,
) -> int:
    """Return the first room in catalog order with no overlapping active booking."""
    for room in rooms:
        room_bookings = bookings_by_room.get(room.room_id, [])
        if not any(booking_overlaps(booking, start_date, end_date) for booking in room_bookings):
            return room.room_id
    return NO_ROOM_AVAILABLE


class BookingService:
    """Assigns rooms to new bookings and reports fully occupied days.

    The service holds no state between calls: every operation reads a fresh
    snapshot from both repositories.
    """

    def __init__(
        self,
        room_repository: Repository[Room],
        booking_repository: Repository[Booking],
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        self._rooms = room_repository
        self._bookings = booking_repository
        self._today_provider = today_provider

    def _today(self) -> date:
        return as_calendar_date(self._today_provider())

    def find_available_room(self, start_date: date, end_date: date) -> int:
        start_date = as_calendar_date(start_date)
        end_date = as_calendar_date(end_date)
        validate_date_range(start_date, end_date, today=self._today())

        rooms = self._rooms.list_all()
        bookings_by_room = _active_bookings_by_room(self._bookings.list_all())
        room_id = select_free_room(rooms, bookings_by_room, start_date, end_date)
        if room_id == NO_ROOM_AVAILABLE:
            logger.info(
                "No room available | start_date=%s | end_date=%s | rooms=%s",
                start_date,
                end_date,
                len(rooms),
            )
        else:
            logger.debug(
                "Room available | room_id=%s | start_date=%s | end_date=%s",
                room_id,
                start_date,
                end_date,
            )
        return room_id

    def create_booking(self, booking: Booking) -> bool:
        """Assign a room to `booking` and store it.

        Returns False, without writing anything, when every room is taken.
        """
        room_id = self.find_available_room(booking.start_date, booking.end_date)
        if room_id == NO_ROOM_AVAILABLE:
            return False

        booking.room_id = room_id
        booking.is_active = True
        self._bookings.add(booking)
        logger.info(
            "Booking created | booking_id=%s | room_id=%s | customer_id=%s | %s..%s",
            booking.booking_id,
            room_id,
            booking.customer_id,
            booking.start_date,
            booking.end_date,
        )
        return True

    def get_fully_occupied_dates(self, start_date: date, end_date: date) -> list[date]:
        # Past ranges are valid here, unlike find_available_room.
        start_date = as_calendar_date(start_date)
        end_date = as_calendar_date(end_date)
        validate_date_range(start_date, end_date)

        rooms = self._rooms.list_all()
        bookings_by_room = _active_bookings_by_room(self._bookings.list_all())
        if not rooms or not bookings_by_room:
            return []

        fully_occupied: list[date] = []
        for offset in range((end_date - start_date).days + 1):
            current = start_date + timedelta(days=offset)
            if select_free_room(rooms, bookings_by_room, current, current) == NO_ROOM_AVAILABLE:
                fully_occupied.append(current)

        logger.debug(
            "Occupancy query | start_date=%s | end_date=%s | fully_occupied=%s",
            start_date,
            end_date,
            len(fully_occupied),
        )
        return fully_occupied

    def list_rooms(self) -> list[Room]:
        return self._rooms.list_all()

    def list_bookings(self) -> list[Booking]:
        return self._bookings.list_all()

    def get_booking(self, booking_id: int) -> Optional[Booking]:
        for booking in self._bookings.list_all():
            if booking.booking_id == booking_id:
                return booking
        return None
