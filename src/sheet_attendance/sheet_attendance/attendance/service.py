from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Iterable, Optional

from ..common.datetime_utils import export_stamp, now_utc
from ..common.validators import require_non_empty
from ..core.enums import StudentType
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..export.excel import build_attendance_archive
from ..sheets.columns import extract_spreadsheet_id
from .cache import SnapshotCache
from .model import AttendanceSummary, CellUpdate, ExportFile, SheetSnapshot, StudentRecord
from .reconcile import ColumnMap, read_students, summarize
from .repository import AttendanceSheetRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SheetInformation:
    snapshot: SheetSnapshot
    cached: bool
    columns_added: tuple[str, ...] = ()

    @property
    def commit_column_added(self) -> bool:
        return "commit" in self.columns_added


@dataclass(frozen=True)
class DisplayData:
    summary: AttendanceSummary
    students: list[StudentRecord]


@dataclass(frozen=True)
class CommitResult:
    updated_count: int
    committed: list[str]
    already_committed: list[str]
    not_found: list[str]

    @property
    def message(self) -> str:
        return f"{self.updated_count} students marked as committed"


def parse_sheet_link(sheet_link: Any) -> str:
    if not sheet_link:
        raise ValidationError("Sheet link is required")
    spreadsheet_id = extract_spreadsheet_id(sheet_link)
    if not spreadsheet_id:
        raise ValidationError("Invalid Google Sheets link")
    return spreadsheet_id


def require_spreadsheet_id(value: Any) -> str:
    if not value or not str(value).strip():
        raise ValidationError("Spreadsheet ID is required")
    return str(value).strip()


def make_export(snapshot: SheetSnapshot, *, now: datetime) -> ExportFile:
    students = read_students(snapshot)
    if not students:
        raise ValidationError("No student data available to export")
    present_count = sum(1 for s in students if s.is_present)
    logger.info(
        "Exporting %d present students out of %d for %s", present_count, len(students), snapshot.spreadsheet_id
    )
    return ExportFile(
        filename=f"attendance_export_{export_stamp(now)}.zip",
        content=build_attendance_archive(students),
        present_count=present_count,
        total_count=len(students),
    )


class AttendanceService:
    """Use cases on a live event sheet: fetch + cache, display, commit, on-spot, export."""

    def __init__(
        self,
        sheets: AttendanceSheetRepository,
        *,
        snapshot_cache: SnapshotCache[SheetSnapshot],
        event_cache: Optional[SnapshotCache] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._sheets = sheets
        self._cache = snapshot_cache
        self._event_cache = event_cache
        self._clock = clock

    def invalidate(self, spreadsheet_id: str) -> None:
        self._cache.invalidate(spreadsheet_id)
        if self._event_cache is not None:
            self._event_cache.invalidate(spreadsheet_id)

    def _load_reconciled(self, spreadsheet_id: str) -> tuple[SheetSnapshot, list[str]]:
        added = self._sheets.ensure_derived_columns(spreadsheet_id)
        return self._sheets.fetch_snapshot(spreadsheet_id), added

    def get_information(self, sheet_link: Any) -> SheetInformation:
        spreadsheet_id = parse_sheet_link(sheet_link)

        cached = self._cache.get(spreadsheet_id)
        if cached is not None:
            return SheetInformation(snapshot=cached, cached=True)

        snapshot, added = self._load_reconciled(spreadsheet_id)
        if added:
            logger.info("Sheet %s: derived columns added %s", spreadsheet_id, added)
        self._cache.set(spreadsheet_id, snapshot)
        return SheetInformation(snapshot=snapshot, cached=False, columns_added=tuple(added))

    def display(self, spreadsheet_id: Any) -> DisplayData:
        spreadsheet_id = require_spreadsheet_id(spreadsheet_id)
        snapshot = self._cache.get(spreadsheet_id)
        if snapshot is None:
            raise NotFoundError("No cached data found for this spreadsheet. Please fetch information first.")

        columns = ColumnMap.from_headers(snapshot.headers)
        if columns.roll_number == -1:
            raise ValidationError("Roll number column not found in sheet headers")
        if columns.attendance == -1:
            raise ValidationError("Attendance/Status column not found in sheet headers")

        students = read_students(snapshot, columns)
        pending = [s for s in students if s.roll_number and not s.is_committed]
        return DisplayData(summary=summarize(students), students=pending)

    def commit(self, spreadsheet_id: Any, roll_numbers: Any, *, marked_by: Any) -> CommitResult:
        spreadsheet_id = require_spreadsheet_id(spreadsheet_id)
        if not isinstance(roll_numbers, (list, tuple)) or not roll_numbers:
            raise ValidationError("Roll numbers array is required and must not be empty")
        marked_by = require_non_empty(marked_by, "marked_by")
        wanted = _unique_roll_numbers(roll_numbers)
        if not wanted:
            raise ValidationError("Roll numbers array is required and must not be empty")

        snapshot, _ = self._load_reconciled(spreadsheet_id)
        columns = ColumnMap.from_headers(snapshot.headers)
        missing = columns.missing("roll_number", "attendance", "commit", "marked_by")
        if missing:
            raise ValidationError(f"Required columns not found in sheet headers: {', '.join(missing)}")

        updates: list[CellUpdate] = []
        committed: list[str] = []
        already: list[str] = []
        seen: set[str] = set()
        for s in read_students(snapshot, columns):
            if s.roll_number not in wanted:
                continue
            seen.add(s.roll_number)
            if s.is_committed:
                already.append(s.roll_number)
                continue
            updates.extend(
                [
                    CellUpdate(s.row_number, columns.attendance, True),
                    CellUpdate(s.row_number, columns.commit, True),
                    CellUpdate(s.row_number, columns.marked_by, marked_by),
                ]
            )
            committed.append(s.roll_number)

        if updates:
            self._sheets.batch_update_cells(spreadsheet_id, updates)
        self.invalidate(spreadsheet_id)

        not_found = [r for r in wanted if r not in seen]
        logger.info(
            "Commit on %s by %s: %d updated, %d already committed, %d not found",
            spreadsheet_id, marked_by, len(committed), len(already), len(not_found),
        )
        return CommitResult(
            updated_count=len(committed),
            committed=committed,
            already_committed=already,
            not_found=not_found,
        )

    def add_on_spot(
        self,
        spreadsheet_id: Any,
        *,
        name: Any,
        roll_number: Any,
        mail_id: Any,
        department: Any,
        marked_by: Any = "",
    ) -> StudentRecord:
        spreadsheet_id = require_spreadsheet_id(spreadsheet_id)
        if not all(v is not None and str(v).strip() for v in (name, roll_number, mail_id, department)):
            raise ValidationError("All student fields are required (name, roll_number, mail_id, department)")
        name, roll_number = str(name).strip(), str(roll_number).strip()
        mail_id, department = str(mail_id).strip(), str(department).strip()
        marked_by = str(marked_by or "").strip()

        snapshot, _ = self._load_reconciled(spreadsheet_id)
        columns = ColumnMap.from_headers(snapshot.headers)
        missing = columns.missing("roll_number", "attendance")
        if missing:
            raise ValidationError(f"Required columns not found in sheet headers: {', '.join(missing)}")

        for s in read_students(snapshot, columns):
            if s.roll_number == roll_number:
                raise ConflictError("Roll number already exists in this sheet", existing=s.to_dict())

        values = {
            columns.name: name,
            columns.roll_number: roll_number,
            columns.mail_id: mail_id,
            columns.department: department,
            columns.attendance: True,
            columns.commit: True,
            columns.type: StudentType.ON_SPOT.value,
            columns.marked_by: marked_by,
        }
        values.pop(-1, None)
        width = max(len(snapshot.headers), max(values) + 1)
        row: list[Any] = [""] * width
        for index, value in values.items():
            row[index] = value

        self._sheets.append_row(spreadsheet_id, row)
        self.invalidate(spreadsheet_id)
        logger.info("On-spot student %s added to %s", roll_number, spreadsheet_id)

        return StudentRecord(
            row_number=len(snapshot.rows) + 2,
            roll_number=roll_number,
            name=name,
            mail_id=mail_id,
            department=department,
            attendance=True,
            is_committed=True,
            student_type=StudentType.ON_SPOT,
            marked_by=marked_by,
        )

    def clear_cache(self, spreadsheet_id: Optional[str] = None) -> int:
        if spreadsheet_id:
            if spreadsheet_id not in self._cache:
                raise NotFoundError("No cache found for specified sheet")
            self.invalidate(spreadsheet_id)
            return 1
        if self._event_cache is not None:
            self._event_cache.clear()
        return self._cache.clear()

    def export(self, spreadsheet_id: Any) -> ExportFile:
        spreadsheet_id = require_spreadsheet_id(spreadsheet_id)
        snapshot = self._sheets.fetch_snapshot(spreadsheet_id)
        self._cache.set(spreadsheet_id, snapshot)
        return make_export(snapshot, now=self._clock())


def _unique_roll_numbers(values: Iterable[Any]) -> list[str]:
    out: list[str] = []
    for v in values:
        if v is None:
            continue
        roll = str(v).strip()
        if roll and roll not in out:
            out.append(roll)
    return out
