from __future__ import annotations

from typing import Iterator, List

from ..providers.base import Location

HISTORY_CAPACITY = 10


class SearchHistory:
    """Most-recent-first list of selected locations, deduplicated by equality."""

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._items: List[Location] = []

    def add(self, location: Location) -> None:
        if location in self._items:
            self._items.remove(location)
        self._items.insert(0, location)
        del self._items[self.capacity:]

    def items(self) -> List[Location]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __iter__(self) -> Iterator[Location]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, location: object) -> bool:
        return location in self._items
