from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from backend.domain.constraints import InvalidDateRangeError
from backend.domain.models import NO_ROOM_AVAILABLE, Booking, Room
from backend.repository.memory_repository import InMemoryRepository
from backend.services.booking_service import BookingService


TODAY = date(2026, 3, 1)


def day(offset: int) -> date:
    return TODAY + timedelta(days=offset)


def active(room_id: int, start: date, end: date, customer_id: int = 1) -> Booking:
    return Booking(
        start_date=start,
        end_date=end,
        customer_id=customer_id,
        room_id=room_id,
        is_active=True,
    )


class CountingRepository(InMemoryRepository):
    """Records how many times the service appends."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.add_calls = 0

    def add(self, entity):
        self.add_calls += 1
        return super().add(entity)


class FailingRepository:
    """Fails the test if the service touches storage."""

    def list_all(self):
        raise AssertionError("storage must not be read")

    def add(self, entity):
        raise AssertionError("storage must not be written")


def _build_service(
    rooms: list[Room] | None = None,
    bookings: list[Booking] | None = None,
) -> tuple[BookingService, CountingRepository]:
    if rooms is None:
        rooms = [Room(1, "A"), Room(2, "B"), Room(3, "C")]
    room_repository = InMemoryRepository(rooms, id_attribute="room_id")
    booking_repository = CountingRepository(bookings or [], id_attribute="booking_id")
    service = BookingService(
        room_repository=room_repository,
        booking_repository=booking_repository,
        today_provider=lambda: TODAY,
    )
    return service, booking_repository


# --- find_available_room ---

@pytest.mark.parametrize(
    ("start", "end"),
    [
        (day(0), day(1)),
        (day(0), day(0)),
        (day(-3), day(2)),
        (day(5), day(4)),
    ],
)
def test_find_available_room_rejects_invalid_ranges(start, end):
    service = BookingService(FailingRepository(), FailingRepository(), lambda: TODAY)
    with pytest.raises(InvalidDateRangeError):
        service.find_available_room(start, end)


def test_single_free_room_is_returned():
    service, _ = _build_service(rooms=[Room(7, "Only room")])
    assert service.find_available_room(day(1), day(1)) == 7


def test_room_with_non_overlapping_booking_is_returned():
    service, _ = _build_service(
        rooms=[Room(1, "Room 1"), Room(2, "Room 2")],
        bookings=[active(1, day(3), day(5))],
    )
    assert service.find_available_room(day(1), day(1)) == 1


def test_returns_no_room_when_every_room_overlaps():
    service, _ = _build_service(
        rooms=[Room(1, "Room 1"), Room(2, "Room 2")],
        bookings=[active(1, day(0), day(2)), active(2, day(0), day(3))],
    )
    assert service.find_available_room(day(1), day(1)) == NO_ROOM_AVAILABLE


def test_room_without_bookings_is_selected_over_booked_room():
    service, _ = _build_service(
        rooms=[Room(1, "Booked room"), Room(2, "Completely free room")],
        bookings=[active(1, day(0), day(2))],
    )
    assert service.find_available_room(day(1), day(1)) == 2


def test_catalog_order_breaks_ties_not_room_id():
    service, _ = _build_service(rooms=[Room(9, "Z"), Room(3, "C"), Room(5, "E")])
    assert service.find_available_room(day(1), day(2)) == 9


def test_inactive_bookings_do_not_block_a_room():
    cancelled = active(1, day(1), day(10))
    cancelled.is_active = False
    service, _ = _build_service(rooms=[Room(1, "A")], bookings=[cancelled])
    assert service.find_available_room(day(2), day(3)) == 1


def test_booking_ending_on_requested_start_day_blocks_the_room():
    service, _ = _build_service(
        rooms=[Room(1, "A"), Room(2, "B")],
        bookings=[active(1, day(1), day(4))],
    )
    assert service.find_available_room(day(4), day(6)) == 2


def test_time_of_day_is_ignored():
    service, _ = _build_service(rooms=[Room(1, "A")])
    start = datetime.combine(day(1), datetime.min.time()).replace(hour=18)
    assert service.find_available_room(start, start) == 1


# --- create_booking ---

def test_create_booking_assigns_room_activates_and_saves():
    service, booking_repository = _build_service()
    booking = Booking(start_date=day(14), end_date=day(15), customer_id=42)

    assert service.create_booking(booking) is True

    assert booking.is_active is True
    assert booking.room_id == 1
    assert booking.booking_id is not None
    assert booking_repository.add_calls == 1
    assert booking_repository.list_all() == [booking]


def test_create_booking_uses_the_room_find_available_room_returns():
    rooms = [Room(1, "A"), Room(2, "B"), Room(3, "C")]
    existing = [active(1, day(5), day(9)), active(2, day(7), day(8))]
    service, _ = _build_service(rooms=rooms, bookings=existing)

    expected_room = service.find_available_room(day(6), day(7))
    booking = Booking(start_date=day(6), end_date=day(7), customer_id=5)
    assert service.create_booking(booking) is True
    assert booking.room_id == expected_room == 3


def test_create_booking_returns_false_and_saves_nothing_when_full():
    rooms = [Room(1, "A"), Room(2, "B"), Room(3, "C")]
    existing = [active(room.room_id, day(7), day(9)) for room in rooms]
    service, booking_repository = _build_service(rooms=rooms, bookings=existing)
    booking = Booking(start_date=day(7), end_date=day(8), customer_id=1)

    assert service.create_booking(booking) is False

    assert booking_repository.add_calls == 0
    assert booking.room_id is None
    assert booking.is_active is False
    assert len(booking_repository.list_all()) == 3


def test_create_booking_propagates_invalid_range_without_writing():
    service, booking_repository = _build_service()
    booking = Booking(start_date=day(0), end_date=day(2), customer_id=1)

    with pytest.raises(InvalidDateRangeError):
        service.create_booking(booking)
    assert booking_repository.add_calls == 0


def test_create_booking_overwrites_draft_room_and_active_flag():
    service, _ = _build_service(
        rooms=[Room(1, "A"), Room(2, "B")],
        bookings=[active(1, day(1), day(3))],
    )
    booking = Booking(start_date=day(2), end_date=day(2), customer_id=3, room_id=1, is_active=False)

    assert service.create_booking(booking) is True
    assert booking.room_id == 2
    assert booking.is_active is True


def test_consecutive_bookings_fill_rooms_in_catalog_order():
    service, _ = _build_service()
    results = []
    for customer_id in range(1, 5):
        booking = Booking(start_date=day(3), end_date=day(4), customer_id=customer_id)
        results.append((service.create_booking(booking), booking.room_id))
    assert results == [(True, 1), (True, 2), (True, 3), (False, None)]


def test_store_failure_propagates():
    class BrokenBookings:
        def list_all(self):
            raise RuntimeError("database unavailable")

        def add(self, entity):
            raise AssertionError("unreachable")

    service = BookingService(
        InMemoryRepository([Room(1, "A")], id_attribute="room_id"),
        BrokenBookings(),
        lambda: TODAY,
    )
    with pytest.raises(RuntimeError, match="database unavailable"):
        service.create_booking(Booking(start_date=day(1), end_date=day(1), customer_id=1))


# --- get_fully_occupied_dates ---

def test_fully_occupied_rejects_start_after_end_before_reading():
    service = BookingService(FailingRepository(), FailingRepository(), lambda: TODAY)
    with pytest.raises(InvalidDateRangeError):
        service.get_fully_occupied_dates(date(2025, 1, 10), date(2025, 1, 5))


def test_fully_occupied_with_no_bookings_is_empty():
    service, _ = _build_service()
    assert service.get_fully_occupied_dates(date(2025, 1, 1), date(2025, 1, 3)) == []


def test_fully_occupied_empty_when_one_room_is_never_booked():
    service, _ = _build_service(
        bookings=[
            active(1, date(2025, 1, 1), date(2025, 1, 3)),
            active(2, date(2025, 1, 2), date(2025, 1, 3)),
        ]
    )
    assert service.get_fully_occupied_dates(date(2025, 1, 1), date(2025, 1, 3)) == []


def test_fully_occupied_returns_only_days_every_room_is_booked():
    full_day = date(2025, 1, 2)
    service, _ = _build_service(
        bookings=[
            active(1, full_day, full_day),
            active(2, full_day, full_day),
            active(3, full_day, full_day),
            active(1, date(2025, 1, 1), date(2025, 1, 1)),
        ]
    )
    assert service.get_fully_occupied_dates(date(2025, 1, 1), date(2025, 1, 3)) == [full_day]


def test_fully_occupied_accepts_past_and_present_ranges():
    service, _ = _build_service(
        rooms=[Room(1, "A")],
        bookings=[active(1, day(-2), day(0))],
    )
    assert service.get_fully_occupied_dates(day(-3), day(0)) == [day(-2), day(-1), day(0)]


def test_fully_occupied_dates_are_sorted_and_unique_with_overlapping_bookings():
    service, _ = _build_service(
        rooms=[Room(1, "A"), Room(2, "B")],
        bookings=[
            active(1, day(30), day(31)),
            active(2, day(30), day(30)),
            active(2, day(30), day(32)),
            active(1, day(32), day(32)),
        ],
    )
    assert service.get_fully_occupied_dates(day(30), day(32)) == [day(30), day(31), day(32)]


def test_fully_occupied_ignores_inactive_bookings():
    cancelled = active(2, day(5), day(5))
    cancelled.is_active = False
    service, _ = _build_service(
        rooms=[Room(1, "A"), Room(2, "B")],
        bookings=[active(1, day(5), day(5)), cancelled],
    )
    assert service.get_fully_occupied_dates(day(5), day(5)) == []


def test_fully_occupied_with_empty_catalog_is_empty():
    service, _ = _build_service(rooms=[], bookings=[active(1, day(1), day(3))])
    assert service.get_fully_occupied_dates(day(1), day(3)) == []


def test_fully_occupied_single_day_range():
    service, _ = _build_service(
        rooms=[Room(1, "A")],
        bookings=[active(1, day(10), day(20))],
    )
    assert service.get_fully_occupied_dates(day(15), day(15)) == [day(15)]


def test_fully_occupied_is_idempotent():
    service, _ = _build_service(
        rooms=[Room(1, "A"), Room(2, "B")],
        bookings=[active(1, day(1), day(4)), active(2, day(2), day(6))],
    )
    first = service.get_fully_occupied_dates(day(0), day(7))
    second = service.get_fully_occupied_dates(day(0), day(7))
    assert first == second == [day(2), day(3), day(4)]


def test_fully_occupied_does_not_write():
    service, booking_repository = _build_service(bookings=[active(1, day(1), day(1))])
    service.get_fully_occupied_dates(day(0), day(5))
    assert booking_repository.add_calls == 0


def test_fully_occupied_handles_the_last_representable_day():
    service, _ = _build_service(
        rooms=[Room(1, "A")],
        bookings=[active(1, date(9999, 12, 30), date.max)],
    )
    assert service.get_fully_occupied_dates(date(9999, 12, 30), date.max) == [
        date(9999, 12, 30),
        date.max,
    ]
