from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..core.constants import HISTORY_HEADERS
from ..core.enums import SessionStatus
from ..sheets.columns import cell


@dataclass(frozen=True)
class HistoryRecord:
    """Domain entity: one uploaded event sheet (a "session") in the history log."""

    sheet_name: str
    sheet_link: str
    sheet_id: str
    event_name: str
    uploaded_by: str
    uploaded_at: str
    status: str
    closed_at: str = ""
    row_number: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        return self.status.strip().lower() == SessionStatus.COMPLETE.value.lower()

    @classmethod
    def from_row(cls, row: Sequence[Any], *, row_number: Optional[int] = None) -> "HistoryRecord":
        values = [str(cell(row, i)) for i in range(len(HISTORY_HEADERS))]
        return cls(*values, row_number=row_number)

    def to_row(self) -> list[str]:
        return [
            self.sheet_name,
            self.sheet_link,
            self.sheet_id,
            self.event_name,
            self.uploaded_by,
            self.uploaded_at,
            self.status,
            self.closed_at,
        ]

    def to_dict(self) -> dict:
        return dict(zip(HISTORY_HEADERS, self.to_row()))
