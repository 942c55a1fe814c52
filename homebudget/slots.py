"""Append-only slot collection with stable identifiers."""
from __future__ import annotations

from typing import Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

T = TypeVar("T")


class SlotList(Generic[T]):
    """Ordered slots addressed by an id that is never reused.

    Removing an item empties its slot instead of shifting later items, so ids
    held by widgets or callers keep pointing at the same entry.
    """

    def __init__(self) -> None:
        self._slots: List[Optional[T]] = []

    @classmethod
    def from_items(cls, items: Iterable[Optional[T]]) -> "SlotList[T]":
        slots = cls()
        for item in items:
            if item is not None:
                slots.add(item)
        return slots

    def add(self, item: T) -> int:
        self._slots.append(item)
        return len(self._slots) - 1

    def remove(self, slot_id: int) -> None:
        if 0 <= slot_id < len(self._slots):
            self._slots[slot_id] = None

    def get(self, slot_id: int) -> Optional[T]:
        if 0 <= slot_id < len(self._slots):
            return self._slots[slot_id]
        return None

    def replace(self, slot_id: int, item: T) -> None:
        if self.get(slot_id) is None:
            raise KeyError(slot_id)
        self._slots[slot_id] = item

    def items(self) -> Iterator[Tuple[int, T]]:
        for slot_id, item in enumerate(self._slots):
            if item is not None:
                yield slot_id, item

    def values(self) -> List[T]:
        return [item for _, item in self.items()]

    def as_list(self) -> List[Optional[T]]:
        return list(self._slots)

    def __len__(self) -> int:
        return sum(1 for _ in self.items())

    def __iter__(self) -> Iterator[T]:
        return iter(self.values())
