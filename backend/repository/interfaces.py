"""Storage ports consumed by the booking service."""

from __future__ import annotations

from typing import Protocol, TypeVar

T = TypeVar("T")


class Repository(Protocol[T]):
    """Minimal collection capability: snapshot reads and appends.

    `list_all` must return a consistent point-in-time copy; callers may
    iterate it freely while other writers append.
    """

    def list_all(self) -> list[T]: ...

    def add(self, entity: T) -> T: ...
