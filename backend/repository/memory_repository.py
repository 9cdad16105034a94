"""In-memory repository used by tests and throwaway environments."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, replace
from threading import RLock
from typing import Generic, Iterable, TypeVar

T = TypeVar("T")


class InMemoryRepository(Generic[T]):
    """List-backed `Repository` that assigns sequential ids on `add`.

    Entities are dataclasses; `id_attribute` names the identity field. Mutable
    entities receive their id in place, frozen ones are replaced by a copy.
    """

    def __init__(self, items: Iterable[T] = (), *, id_attribute: str) -> None:
        self._items: list[T] = list(items)
        self._id_attribute = id_attribute
        self._lock = RLock()
        existing_ids = [
            getattr(item, id_attribute)
            for item in self._items
            if getattr(item, id_attribute) is not None
        ]
        self._next_id = max(existing_ids, default=0) + 1

    def list_all(self) -> list[T]:
        with self._lock:
            return list(self._items)

    def add(self, entity: T) -> T:
        with self._lock:
            if getattr(entity, self._id_attribute) is None:
                entity = self._assign_id(entity, self._next_id)
            self._next_id = max(self._next_id, getattr(entity, self._id_attribute) + 1)
            self._items.append(entity)
            return entity

    def _assign_id(self, entity: T, new_id: int) -> T:
        try:
            setattr(entity, self._id_attribute, new_id)
        except FrozenInstanceError:
            return replace(entity, **{self._id_attribute: new_id})
        return entity
