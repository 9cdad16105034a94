"""Repository layer responsible for all database access."""

from __future__ import annotations

import sqlite3
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

from backend.domain.models import Booking, Room
from backend.utils.config import Settings, get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def _row_to_booking(row: sqlite3.Row) -> Booking:
    return Booking(
        booking_id=int(row["id"]),
        room_id=None if row["room_id"] is None else int(row["room_id"]),
        customer_id=int(row["customer_id"]),
        start_date=date.fromisoformat(str(row["start_date"])),
        end_date=date.fromisoformat(str(row["end_date"])),
        is_active=bool(row["is_active"]),
    )


class DataRepository:
    """Encapsulates SQLite access so business logic stays storage-agnostic."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()
        self._db_path = Path(self._settings.database_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def database_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        connection = sqlite3.connect(self._db_path)
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON;")
        return connection

    def initialize_database(self) -> None:
        """Create all persistence artifacts before API startup."""
        try:
            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS Rooms (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        description TEXT NOT NULL
                    );
                    """
                )
                cursor.execute(
                    """
                    CREATE TABLE IF NOT EXISTS Bookings (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        room_id INTEGER,
                        customer_id INTEGER NOT NULL,
                        start_date TEXT NOT NULL,
                        end_date TEXT NOT NULL,
                        is_active INTEGER NOT NULL CHECK (is_active IN (0,1)),
                        created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                        CHECK (start_date <= end_date),
                        FOREIGN KEY (room_id) REFERENCES Rooms(id)
                    );
                    """
                )
                cursor.execute(
                    """
                    CREATE INDEX IF NOT EXISTS idx_bookings_room_dates
                    ON Bookings(room_id, start_date, end_date);
                    """
                )
                conn.commit()
            logger.info("Database initialized at %s", self._db_path)
        except sqlite3.Error as exc:
            raise RuntimeError(f"Database initialization failed: {exc}") from exc

    def seed_demo_data(self, today: Optional[date] = None) -> int:
        """Seed rooms and bookings only when the Rooms table is empty.

        Every room is booked across the configured fully occupied window so
        the occupancy query has something to report. Returns the number of
        bookings inserted.
        """
        today = today or date.today()
        window_start = today + timedelta(days=self._settings.seed_fully_occupied_start_offset_days)
        window_end = today + timedelta(days=self._settings.seed_fully_occupied_end_offset_days)
        customer_count = max(1, self._settings.seed_customer_count)
        try:
            with self._connect() as conn:
                cursor = conn.cursor()

                cursor.execute("SELECT COUNT(*) AS count FROM Rooms;")
                if int(cursor.fetchone()["count"]) > 0:
                    logger.info("Demo data already present; skipping seed")
                    return 0

                cursor.executemany(
                    "INSERT INTO Rooms (description) VALUES (?);",
                    [(description,) for description in self._settings.seed_room_descriptions],
                )
                cursor.execute("SELECT id FROM Rooms ORDER BY id ASC;")
                room_ids = [int(row["id"]) for row in cursor.fetchall()]
                if not room_ids:
                    conn.commit()
                    logger.warning("No seed rooms configured; bookings not seeded")
                    return 0

                tomorrow = (today + timedelta(days=1)).isoformat()
                booking_rows = [(room_ids[0], 1, tomorrow, tomorrow, 1)]
                for index, room_id in enumerate(room_ids):
                    booking_rows.append(
                        (
                            room_id,
                            index % customer_count + 1,
                            window_start.isoformat(),
                            window_end.isoformat(),
                            1,
                        )
                    )
                # cancelled reservation, ignored by availability checks
                booking_rows.append(
                    (
                        room_ids[-1],
                        customer_count,
                        (today + timedelta(days=2)).isoformat(),
                        (today + timedelta(days=4)).isoformat(),
                        0,
                    )
                )
                cursor.executemany(
                    """
                    INSERT INTO Bookings (room_id, customer_id, start_date, end_date, is_active)
                    VALUES (?, ?, ?, ?, ?);
                    """,
                    booking_rows,
                )
                conn.commit()
            logger.info(
                "Demo seed completed | rooms=%s | bookings=%s | full_window=%s..%s",
                len(room_ids),
                len(booking_rows),
                window_start.isoformat(),
                window_end.isoformat(),
            )
            return len(booking_rows)
        except sqlite3.Error as exc:
            raise RuntimeError(f"Demo data seeding failed: {exc}") from exc

    def list_rooms(self) -> list[Room]:
        """Return the room catalog in stable id order."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT id, description FROM Rooms ORDER BY id ASC;")
            return [
                Room(room_id=int(row["id"]), description=str(row["description"]))
                for row in cursor.fetchall()
            ]

    def create_room(self, description: str) -> Room:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("INSERT INTO Rooms (description) VALUES (?);", (description,))
            conn.commit()
            return Room(room_id=int(cursor.lastrowid), description=description)

    def list_bookings(self) -> list[Booking]:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, room_id, customer_id, start_date, end_date, is_active
                FROM Bookings
                ORDER BY id ASC;
                """
            )
            return [_row_to_booking(row) for row in cursor.fetchall()]

    def create_booking(self, booking: Booking) -> int:
        """Insert booking row and return the created id."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO Bookings (room_id, customer_id, start_date, end_date, is_active)
                VALUES (?, ?, ?, ?, ?);
                """,
                (
                    booking.room_id,
                    booking.customer_id,
                    booking.start_date.isoformat(),
                    booking.end_date.isoformat(),
                    1 if booking.is_active else 0,
                ),
            )
            conn.commit()
            return int(cursor.lastrowid)

    def count_bookings(self) -> int:
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) AS count FROM Bookings;")
            return int(cursor.fetchone()["count"])


class SqliteRoomRepository:
    """`Repository[Room]` view over the Rooms table."""

    def __init__(self, repository: DataRepository) -> None:
        self._repository = repository

    def list_all(self) -> list[Room]:
        return self._repository.list_rooms()

    def add(self, entity: Room) -> Room:
        return self._repository.create_room(entity.description)


class SqliteBookingRepository:
    """`Repository[Booking]` view over the Bookings table."""

    def __init__(self, repository: DataRepository) -> None:
        self._repository = repository

    def list_all(self) -> list[Booking]:
        return self._repository.list_bookings()

    def add(self, entity: Booking) -> Booking:
        entity.booking_id = self._repository.create_booking(entity)
        return entity
