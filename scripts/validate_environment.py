#!/usr/bin/env python3
"""Validate local hotel booking environment readiness."""

from __future__ import annotations

import importlib
import shutil
import sys
import tempfile
from dataclasses import replace
from datetime import date, timedelta
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.repository.data_repository import (
    DataRepository,
    SqliteBookingRepository,
    SqliteRoomRepository,
)
from backend.services.booking_service import BookingService
from backend.utils.config import get_settings

SEPARATOR_LINE = "=" * 44


def _print_result(name: str, success: bool, detail: str = "") -> tuple[bool, str]:
    if success:
        return True, f"[PASS] {name}{detail}"
    return False, f"[FAIL] {name}: {detail}"


def main() -> int:
    results: list[str] = []
    all_passed = True
    temp_dir = tempfile.mkdtemp(prefix="hotel-booking-env-")

    # CHECK 1: Python version >= 3.10
    if sys.version_info >= (3, 10):
        ok, line = _print_result("Python " + sys.version.split()[0], True)
    else:
        ok, line = _print_result(
            "Python version >= 3.10",
            False,
            f"found {sys.version.split()[0]}",
        )
    results.append(line)
    all_passed = all_passed and ok

    # CHECK 2: Required packages importable
    package_specs = [
        ("fastapi", "fastapi"),
        ("uvicorn", "uvicorn"),
        ("pydantic", "pydantic"),
        ("pandas", "pandas"),
        ("requests", "requests"),
        ("streamlit", "streamlit"),
        ("httpx", "httpx"),
        ("pytest", "pytest"),
    ]
    from importlib.metadata import PackageNotFoundError, version

    import_errors: list[str] = []
    for module_name, dist_name in package_specs:
        try:
            importlib.import_module(module_name)
            version(dist_name)
        except (ImportError, PackageNotFoundError) as exc:
            import_errors.append(f"{module_name} ({exc})")
    if import_errors:
        ok, line = _print_result(
            "Required packages",
            False,
            "missing/unimportable -> " + "; ".join(import_errors),
        )
    else:
        ok, line = _print_result("Required packages: all importable", True)
    results.append(line)
    all_passed = all_passed and ok

    try:
        settings = replace(
            get_settings(),
            database_path=Path(temp_dir) / "hotel_booking_validation.db",
        )
        repository = DataRepository(settings)
        today = date.today()

        # CHECK 3: Database initialization
        try:
            repository.initialize_database()
            ok, line = _print_result("Database initialization", True)
        except RuntimeError as exc:
            ok, line = _print_result("Database initialization", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 4: Demo data seeding
        try:
            seeded = repository.seed_demo_data(today=today)
            expected = len(settings.seed_room_descriptions) + 2
            if seeded != expected:
                raise RuntimeError(f"expected {expected} bookings, got {seeded}")
            ok, line = _print_result("Demo data seeding", True, f": {seeded} bookings")
        except RuntimeError as exc:
            ok, line = _print_result("Demo data seeding", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

        # CHECK 5: Occupancy query reports the seeded full window
        service = BookingService(
            room_repository=SqliteRoomRepository(repository),
            booking_repository=SqliteBookingRepository(repository),
            today_provider=lambda: today,
        )
        window_start = today + timedelta(days=settings.seed_fully_occupied_start_offset_days)
        window_end = today + timedelta(days=settings.seed_fully_occupied_end_offset_days)
        try:
            dates = service.get_fully_occupied_dates(window_start, window_end)
            expected_days = (window_end - window_start).days + 1
            if len(dates) != expected_days:
                raise RuntimeError(f"expected {expected_days} fully occupied days, got {len(dates)}")
            ok, line = _print_result("Occupancy query", True, f": {len(dates)} full days")
        except (RuntimeError, ValueError) as exc:
            ok, line = _print_result("Occupancy query", False, str(exc))
        results.append(line)
        all_passed = all_passed and ok

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)

    print(SEPARATOR_LINE)
    print(" Hotel Booking Environment Validation")
    print(SEPARATOR_LINE)
    for line in results:
        print(f" {line}")
    print(SEPARATOR_LINE)
    if all_passed:
        print(" All checks passed. Environment is ready.")
        print(SEPARATOR_LINE)
        return 0
    print(" One or more checks failed.")
    print(SEPARATOR_LINE)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
