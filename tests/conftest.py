from __future__ import annotations

import os
import re
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

import pytest

os.environ.setdefault("APP_ENV", "testing")

from src.sheet_attendance.sheet_attendance.container import wire
from src.sheet_attendance.sheet_attendance.attendance.google_attendance_repository import GoogleAttendanceSheetRepository
from src.sheet_attendance.sheet_attendance.core.constants import HISTORY_HEADERS, USER_HEADERS
from src.sheet_attendance.sheet_attendance.core.exceptions import SheetAccessError
from src.sheet_attendance.sheet_attendance.history.google_history_repository import GoogleHistoryRepository
from src.sheet_attendance.sheet_attendance.users.google_user_repository import GoogleUserRepository

_A1_PART = re.compile(r"^([A-Z]*)(\d*)$")

EVENT_HEADERS = ["name", "roll_number", "mail_id", "department", "attendance"]


def _col_index(letters: str) -> int:
    n = 0
    for ch in letters:
        n = n * 26 + (ord(ch) - 64)
    return n - 1


def _parse_a1(a1_range: str) -> tuple[int, Optional[int], int, Optional[int]]:
    """Return (row_start, row_end, col_start, col_end), 0-based, ends inclusive or None."""
    ref = a1_range.split("!", 1)[1] if "!" in a1_range else a1_range
    start, _, end = ref.partition(":")
    end = end or start
    s_col, s_row = _A1_PART.match(start).groups()
    e_col, e_row = _A1_PART.match(end).groups()
    return (
        int(s_row) - 1 if s_row else 0,
        int(e_row) - 1 if e_row else None,
        _col_index(s_col) if s_col else 0,
        _col_index(e_col) if e_col else None,
    )


def _render(value: Any) -> Any:
    # The API returns formatted values: checkboxes come back as TRUE/FALSE strings.
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, int):
        return str(value)
    return value


class FakeSheetsClient:
    """In-memory stand-in for SheetsClient; one grid per spreadsheet (tab Sheet1 only)."""

    def __init__(self):
        self.grids: dict[str, list[list[Any]]] = {}
        self.titles: dict[str, str] = {}
        self.denied: set[str] = set()
        self.batch_calls: list[tuple[str, list[dict]]] = []
        self.append_calls: list[tuple[str, list[list[Any]]]] = []

    def add_sheet(self, spreadsheet_id: str, rows: Sequence[Sequence[Any]], *, title: str = "Event Sheet") -> None:
        self.grids[spreadsheet_id] = [list(r) for r in rows]
        self.titles[spreadsheet_id] = title

    def _grid(self, spreadsheet_id: str) -> list[list[Any]]:
        if spreadsheet_id in self.denied or spreadsheet_id not in self.grids:
            raise SheetAccessError(f"Requested entity was not found: {spreadsheet_id}", status=404)
        return self.grids[spreadsheet_id]

    def get_title(self, spreadsheet_id: str) -> str:
        self._grid(spreadsheet_id)
        return self.titles[spreadsheet_id]

    def get_values(self, spreadsheet_id: str, a1_range: str) -> list[list[Any]]:
        grid = self._grid(spreadsheet_id)
        r0, r1, c0, c1 = _parse_a1(a1_range)
        r1 = len(grid) - 1 if r1 is None else min(r1, len(grid) - 1)
        out: list[list[Any]] = []
        for row in grid[r0 : r1 + 1]:
            end = len(row) if c1 is None else c1 + 1
            values = [_render(v) for v in row[c0:end]]
            while values and values[-1] in ("", None):
                values.pop()
            out.append(values)
        while out and not out[-1]:
            out.pop()
        return out

    def update_values(self, spreadsheet_id: str, a1_range: str, values, *, value_input_option: str = "USER_ENTERED") -> int:
        grid = self._grid(spreadsheet_id)
        r0, _, c0, _ = _parse_a1(a1_range)
        cells = 0
        for dr, row in enumerate(values):
            while len(grid) <= r0 + dr:
                grid.append([])
            target = grid[r0 + dr]
            for dc, value in enumerate(row):
                while len(target) <= c0 + dc:
                    target.append("")
                target[c0 + dc] = value
                cells += 1
        return cells

    def append_values(self, spreadsheet_id: str, a1_range: str, values, *, value_input_option: str = "USER_ENTERED") -> int:
        grid = self._grid(spreadsheet_id)
        rows = [list(r) for r in values]
        self.append_calls.append((spreadsheet_id, rows))
        grid.extend(rows)
        return len(rows)

    def batch_update_values(self, spreadsheet_id: str, data, *, value_input_option: str = "USER_ENTERED") -> int:
        self._grid(spreadsheet_id)
        self.batch_calls.append((spreadsheet_id, list(data)))
        return sum(self.update_values(spreadsheet_id, d["range"], d["values"]) for d in data)

    def cell(self, spreadsheet_id: str, row_number: int, header: str) -> Any:
        grid = self.grids[spreadsheet_id]
        col = [str(h).lower() for h in grid[0]].index(header)
        row = grid[row_number - 1]
        return row[col] if col < len(row) else ""


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 14, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def sheets_client() -> FakeSheetsClient:
    client = FakeSheetsClient()
    client.add_sheet("users-sheet", [USER_HEADERS], title="Users")
    client.add_sheet("history-sheet", [HISTORY_HEADERS], title="History")
    client.add_sheet(
        "event-1",
        [
            EVENT_HEADERS,
            ["Asha", "101", "asha@example.com", "CSE", "FALSE"],
            ["Bala", "102", "bala@example.com", "ECE", "TRUE"],
            ["Chen", "103", "chen@example.com", "MECH", "FALSE"],
        ],
        title="Hackathon Registrations",
    )
    return client


@pytest.fixture
def container(sheets_client):
    return wire(
        attendance_repo=GoogleAttendanceSheetRepository(sheets_client),
        history_repo=GoogleHistoryRepository(sheets_client, "history-sheet"),
        users_repo=GoogleUserRepository(sheets_client, "users-sheet"),
    )
