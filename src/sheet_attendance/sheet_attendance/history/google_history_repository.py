from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import DEFAULT_TAB, HISTORY_RANGE
from ..core.enums import SessionStatus
from ..core.exceptions import SheetAccessError
from ..sheets.client import SheetsClient
from .model import HistoryRecord
from .repository import HistoryRepository


class GoogleHistoryRepository(HistoryRepository):
    """History log stored as one row per upload in the SHEET_HISTORY spreadsheet."""

    def __init__(self, client: SheetsClient, spreadsheet_id: str):
        self._client = client
        self._spreadsheet_id = spreadsheet_id

    def _sheet_id(self) -> str:
        if not self._spreadsheet_id:
            raise SheetAccessError("SHEET_HISTORY environment variable is not set")
        return self._spreadsheet_id

    def _records(self) -> list[HistoryRecord]:
        rows = self._client.get_values(self._sheet_id(), HISTORY_RANGE)
        # Row 1 is the header row.
        return [HistoryRecord.from_row(r, row_number=i + 1) for i, r in enumerate(rows) if i > 0 and any(r)]

    def list_all(self) -> Sequence[HistoryRecord]:
        return list(reversed(self._records()))

    def find_by_sheet_id(self, sheet_id: str) -> Optional[HistoryRecord]:
        for r in self._records():
            if r.sheet_id == sheet_id:
                return r
        return None

    def list_by_uploader(self, username: str) -> Sequence[HistoryRecord]:
        return [r for r in reversed(self._records()) if r.uploaded_by == username]

    def append(self, record: HistoryRecord) -> None:
        self._client.append_values(self._sheet_id(), HISTORY_RANGE, [record.to_row()], value_input_option="RAW")

    def mark_complete(self, sheet_id: str, *, closed_at: str) -> bool:
        record = self.find_by_sheet_id(sheet_id)
        if not record or record.row_number is None:
            return False
        self._client.update_values(
            self._sheet_id(),
            f"{DEFAULT_TAB}!G{record.row_number}:H{record.row_number}",
            [[SessionStatus.COMPLETE.value, closed_at]],
            value_input_option="RAW",
        )
        return True
