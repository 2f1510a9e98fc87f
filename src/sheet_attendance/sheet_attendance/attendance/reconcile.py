"""Column reconciliation and attendance counting over a sheet snapshot."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from ..core.enums import StudentType
from ..sheets.columns import cell, find_column, parse_bool
from .model import AttendanceSummary, SheetSnapshot, StudentRecord


@dataclass(frozen=True)
class ColumnMap:
    """Positions of the known columns in a header row (-1 when absent)."""

    name: int
    roll_number: int
    mail_id: int
    department: int
    attendance: int
    commit: int
    type: int
    marked_by: int

    @classmethod
    def from_headers(cls, headers: Sequence[Any]) -> "ColumnMap":
        return cls(
            name=find_column(headers, exact=("name", "student_name", "full_name")),
            roll_number=find_column(headers, exact=("roll_number",), contains=("roll",)),
            mail_id=find_column(headers, exact=("mail_id", "email", "mail"), contains=("mail",)),
            department=find_column(headers, exact=("department", "dept")),
            attendance=find_column(headers, exact=("attendance", "status")),
            commit=find_column(headers, exact=("commit",)),
            type=find_column(headers, exact=("type",)),
            marked_by=find_column(headers, exact=("marked_by", "marked by")),
        )

    def missing(self, *names: str) -> list[str]:
        return [n for n in names if getattr(self, n) == -1]


def _is_blank_row(row: Sequence[Any]) -> bool:
    return all(v is None or str(v).strip() == "" for v in row)


def _student_type(value: Any) -> StudentType:
    if isinstance(value, str) and value.strip().upper() == StudentType.ON_SPOT.value:
        return StudentType.ON_SPOT
    return StudentType.REGISTERED


def read_students(snapshot: SheetSnapshot, columns: ColumnMap | None = None) -> list[StudentRecord]:
    """Turn raw rows into student records; completely empty rows are skipped."""
    columns = columns or ColumnMap.from_headers(snapshot.headers)
    out: list[StudentRecord] = []
    for i, row in enumerate(snapshot.rows):
        if _is_blank_row(row):
            continue
        out.append(
            StudentRecord(
                row_number=i + 2,
                roll_number=str(cell(row, columns.roll_number)).strip(),
                name=str(cell(row, columns.name)).strip(),
                mail_id=str(cell(row, columns.mail_id)).strip(),
                department=str(cell(row, columns.department)).strip(),
                attendance=parse_bool(cell(row, columns.attendance, "FALSE")),
                is_committed=parse_bool(cell(row, columns.commit, "FALSE")),
                student_type=_student_type(cell(row, columns.type, StudentType.REGISTERED.value)),
                marked_by=str(cell(row, columns.marked_by)).strip(),
            )
        )
    return out


def summarize(students: Sequence[StudentRecord]) -> AttendanceSummary:
    """Count each row exactly once: present + absent == registered + on_spot."""
    on_spot = sum(1 for s in students if s.is_on_spot)
    registered = len(students) - on_spot
    present = sum(1 for s in students if s.is_present)
    return AttendanceSummary(
        registered=registered,
        on_spot=on_spot,
        present=present,
        absent=len(students) - present,
    )
