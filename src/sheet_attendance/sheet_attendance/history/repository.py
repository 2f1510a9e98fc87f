from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import HistoryRecord


class HistoryRepository(Protocol):
    def list_all(self) -> Sequence[HistoryRecord]:
        """Most recent upload first."""

        raise NotImplementedError

    def find_by_sheet_id(self, sheet_id: str) -> Optional[HistoryRecord]:
        raise NotImplementedError

    def list_by_uploader(self, username: str) -> Sequence[HistoryRecord]:
        raise NotImplementedError

    def append(self, record: HistoryRecord) -> None:
        raise NotImplementedError

    def mark_complete(self, sheet_id: str, *, closed_at: str) -> bool:
        raise NotImplementedError
