from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..core.enums import PresenceStatus, StudentType


@dataclass(frozen=True)
class SheetSnapshot:
    """Domain entity: one read of an event sheet (header row + data rows)."""

    spreadsheet_id: str
    sheet_name: str
    headers: list[str]
    rows: list[list[Any]] = field(default_factory=list)

    @property
    def total_rows(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict:
        return {
            "sheet_name": self.sheet_name,
            "spreadsheet_id": self.spreadsheet_id,
            "headers": list(self.headers),
            "data": [list(r) for r in self.rows],
            "total_rows": self.total_rows,
        }


@dataclass(frozen=True)
class CellUpdate:
    """A single-cell write; ``row_number`` is the 1-based sheet row (header is row 1)."""

    row_number: int
    column_index: int
    value: Any


@dataclass(frozen=True)
class StudentRecord:
    """Read-model of one attendance row after header reconciliation."""

    row_number: int
    roll_number: str
    name: str
    mail_id: str
    department: str
    attendance: bool
    is_committed: bool
    student_type: StudentType
    marked_by: str

    @property
    def is_present(self) -> bool:
        # A committed row is always present, whatever the attendance cell says.
        return self.attendance or self.is_committed

    @property
    def status(self) -> PresenceStatus:
        return PresenceStatus.PRESENT if self.is_present else PresenceStatus.ABSENT

    @property
    def is_on_spot(self) -> bool:
        return self.student_type == StudentType.ON_SPOT

    def to_dict(self) -> dict:
        return {
            # 1-based over all data rows; the sheet row is id + 1
            "id": self.row_number - 1,
            "roll_number": self.roll_number,
            "name": self.name,
            "mail_id": self.mail_id,
            "department": self.department,
            "status": self.status.value,
            "is_present": self.is_present,
            "is_committed": self.is_committed,
            "is_on_spot": self.is_on_spot,
            "type": self.student_type.value,
            "marked_by": self.marked_by,
        }


@dataclass(frozen=True)
class AttendanceSummary:
    registered: int
    on_spot: int
    present: int
    absent: int

    @property
    def total(self) -> int:
        return self.registered + self.on_spot

    def to_dict(self) -> dict:
        return {
            "registered": self.registered,
            "on_spot": self.on_spot,
            "present": self.present,
            "absent": self.absent,
            "total": self.total,
        }


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: bytes
    present_count: int
    total_count: int
