"""Domain models for rooms and bookings."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


NO_ROOM_AVAILABLE = -1


@dataclass(frozen=True)
class Room:
    room_id: int
    description: str


@dataclass
class Booking:
    """A reservation of one room for an inclusive range of calendar dates.

    `room_id` stays unset on a draft until the booking service assigns one;
    `booking_id` is assigned by the repository on insert.
    """

    start_date: date
    end_date: date
    customer_id: int
    room_id: Optional[int] = None
    is_active: bool = False
    booking_id: Optional[int] = None
