from __future__ import annotations

import logging
from typing import Any, Sequence

from ..core.constants import DEFAULT_TAB, DERIVED_COLUMN_DEFAULTS, EVENT_DATA_RANGE, EVENT_HEADER_RANGE
from ..sheets.client import SheetsClient
from ..sheets.columns import column_letter
from .model import CellUpdate, SheetSnapshot
from .reconcile import ColumnMap
from .repository import AttendanceSheetRepository

logger = logging.getLogger(__name__)


def _a1(column_index: int, row_number: int) -> str:
    return f"{DEFAULT_TAB}!{column_letter(column_index)}{row_number}"


class GoogleAttendanceSheetRepository(AttendanceSheetRepository):
    def __init__(self, client: SheetsClient):
        self._client = client

    def fetch_title(self, spreadsheet_id: str) -> str:
        return self._client.get_title(spreadsheet_id)

    def fetch_headers(self, spreadsheet_id: str) -> list[str]:
        values = self._client.get_values(spreadsheet_id, EVENT_HEADER_RANGE)
        return [str(h) for h in values[0]] if values else []

    def fetch_snapshot(self, spreadsheet_id: str) -> SheetSnapshot:
        sheet_name = self._client.get_title(spreadsheet_id)
        values = self._client.get_values(spreadsheet_id, EVENT_DATA_RANGE)
        if not values:
            return SheetSnapshot(spreadsheet_id=spreadsheet_id, sheet_name=sheet_name, headers=[], rows=[])
        return SheetSnapshot(
            spreadsheet_id=spreadsheet_id,
            sheet_name=sheet_name,
            headers=[str(h) for h in values[0]],
            rows=[list(r) for r in values[1:]],
        )

    def ensure_derived_columns(self, spreadsheet_id: str) -> list[str]:
        values = self._client.get_values(spreadsheet_id, EVENT_DATA_RANGE)
        headers = [str(h) for h in values[0]] if values else []
        total_rows = len(values)
        missing = set(ColumnMap.from_headers(headers).missing(*DERIVED_COLUMN_DEFAULTS))

        data: list[dict] = []
        added: list[str] = []
        next_index = len(headers)
        for name, default in DERIVED_COLUMN_DEFAULTS.items():
            if name not in missing:
                continue
            letter = column_letter(next_index)
            data.append({"range": f"{DEFAULT_TAB}!{letter}1", "values": [[name]]})
            if total_rows > 1 and default != "":
                data.append(
                    {
                        "range": f"{DEFAULT_TAB}!{letter}2:{letter}{total_rows}",
                        "values": [[default] for _ in range(total_rows - 1)],
                    }
                )
            added.append(name)
            next_index += 1

        if data:
            self._client.batch_update_values(spreadsheet_id, data)
            logger.info("Added derived columns %s to %s (%d data rows)", added, spreadsheet_id, max(total_rows - 1, 0))
        return added

    def batch_update_cells(self, spreadsheet_id: str, updates: Sequence[CellUpdate]) -> int:
        data = [{"range": _a1(u.column_index, u.row_number), "values": [[u.value]]} for u in updates]
        return self._client.batch_update_values(spreadsheet_id, data)

    def append_row(self, spreadsheet_id: str, row: Sequence[Any]) -> int:
        return self._client.append_values(spreadsheet_id, EVENT_DATA_RANGE, [list(row)])
