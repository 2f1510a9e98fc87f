from __future__ import annotations

from typing import Any, Protocol, Sequence

from .model import CellUpdate, SheetSnapshot


class AttendanceSheetRepository(Protocol):
    """Repository interface for event attendance sheets.

    Note (DIP): services depend on this interface, not on the Google client directly.
    """

    def fetch_title(self, spreadsheet_id: str) -> str:
        raise NotImplementedError

    def fetch_headers(self, spreadsheet_id: str) -> list[str]:
        raise NotImplementedError

    def fetch_snapshot(self, spreadsheet_id: str) -> SheetSnapshot:
        raise NotImplementedError

    def ensure_derived_columns(self, spreadsheet_id: str) -> list[str]:
        """Add missing backend-owned columns; returns the header names added."""

        raise NotImplementedError

    def batch_update_cells(self, spreadsheet_id: str, updates: Sequence[CellUpdate]) -> int:
        raise NotImplementedError

    def append_row(self, spreadsheet_id: str, row: Sequence[Any]) -> int:
        raise NotImplementedError
