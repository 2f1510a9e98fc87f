from __future__ import annotations

from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class SnapshotCache(Generic[T]):
    """Process-local map of spreadsheet id -> cached value.

    Entries live until invalidated explicitly; there is no TTL and no size bound.
    """

    def __init__(self) -> None:
        self._items: dict[str, T] = {}

    def get(self, spreadsheet_id: str) -> Optional[T]:
        return self._items.get(spreadsheet_id)

    def set(self, spreadsheet_id: str, value: T) -> None:
        self._items[spreadsheet_id] = value

    def invalidate(self, spreadsheet_id: str) -> bool:
        return self._items.pop(spreadsheet_id, None) is not None

    def clear(self) -> int:
        count = len(self._items)
        self._items.clear()
        return count

    def __contains__(self, spreadsheet_id: object) -> bool:
        return spreadsheet_id in self._items

    def __len__(self) -> int:
        return len(self._items)
