"""Domain-level date range rules shared by the booking service."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from backend.domain.models import Booking


class BookingValidationError(ValueError):
    """Base error for invalid booking input."""


class InvalidDateRangeError(BookingValidationError):
    """Raised when a requested date range is malformed or not in the future."""


def as_calendar_date(value: date) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Inclusive ranges overlap when each starts on or before the other ends."""
    return start_a <= end_b and start_b <= end_a


def booking_overlaps(booking: Booking, start_date: date, end_date: date) -> bool:
    if not booking.is_active:
        return False
    return ranges_overlap(booking.start_date, booking.end_date, start_date, end_date)


def validate_date_range(
    start_date: date,
    end_date: date,
    today: Optional[date] = None,
) -> None:
    """Reject ranges that end before they start.

    When `today` is given the range must also start strictly after it.
    """
    if today is not None and start_date <= today:
        raise InvalidDateRangeError("The start date cannot be in the past or today")
    if start_date > end_date:
        raise InvalidDateRangeError("The start date cannot be later than the end date")
