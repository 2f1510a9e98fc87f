from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Sequence

from ..attendance.repository import AttendanceSheetRepository
from ..attendance.service import parse_sheet_link
from ..common.datetime_utils import now_utc, to_iso
from ..common.validators import is_non_empty_string, is_valid_email, is_valid_integer
from ..core.constants import DERIVED_COLUMN_DEFAULTS, REQUIRED_EVENT_HEADERS
from ..core.enums import SessionStatus
from ..core.exceptions import ConflictError, SheetAccessError, SheetNotAccessibleError, ValidationError
from ..history.model import HistoryRecord
from ..history.repository import HistoryRepository
from ..sheets.columns import is_bool_like

logger = logging.getLogger(__name__)

HEADER_ERROR = "Header error, check the headers"


@dataclass(frozen=True)
class RowError:
    row: int
    column: str
    error: str
    value: Any = None

    def to_dict(self) -> dict:
        return {"row": self.row, "column": self.column, "error": self.error, "value": self.value}


@dataclass(frozen=True)
class ValidationReport:
    spreadsheet_id: str
    rows_validated: int
    headers: list[str] = field(default_factory=list)


def check_headers(headers: Sequence[Any]) -> list[str]:
    """Validate the header row; returns the trimmed non-empty headers.

    The five required headers must come first, in order. After them only the
    backend-owned optional columns may appear, each at most once.
    """
    received = [str(h).strip() for h in headers if h is not None and str(h).strip()]
    required = list(REQUIRED_EVENT_HEADERS)
    optional = list(DERIVED_COLUMN_DEFAULTS)

    def fail(error: str, expected: list[str]) -> ValidationError:
        return ValidationError(HEADER_ERROR, details={"expected": expected, "received": received, "error": error})

    if len(received) < len(required):
        raise fail(f"Expected at least {len(required)} headers, but got {len(received)}", required)
    if len(received) > len(required) + len(optional):
        raise fail(
            f"Expected at most {len(required) + len(optional)} headers, but got {len(received)}",
            required + optional,
        )

    for i, name in enumerate(required):
        if received[i] != name:
            raise fail(f"Expected '{name}' at position {i + 1}, but got '{received[i]}'", required)

    extras = received[len(required):]
    for pos, name in enumerate(extras, start=len(required) + 1):
        if name not in optional:
            raise fail(f"Unexpected header '{name}' at position {pos}", required + optional)
    if len(set(extras)) != len(extras):
        raise fail("Optional headers may appear only once", required + optional)

    return received


def check_rows(headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> tuple[int, list[RowError]]:
    """Type-check every non-empty data row; returns ``(rows_validated, errors)``."""
    commit_index = headers.index("commit") if "commit" in headers else -1
    errors: list[RowError] = []
    validated = 0

    for i, row in enumerate(rows):
        if not row or all(v is None or str(v).strip() == "" for v in row):
            continue
        validated += 1
        row_number = i + 2
        padded = list(row) + [None] * (len(headers) - len(row))

        if not is_non_empty_string(padded[0]):
            errors.append(RowError(row_number, "name", "Name must be a non-empty string", padded[0]))
        if not is_valid_integer(padded[1]):
            errors.append(RowError(row_number, "roll_number", "Roll number must be a valid integer", padded[1]))
        if not is_valid_email(padded[2]):
            errors.append(RowError(row_number, "mail_id", "Mail ID must be a valid email address", padded[2]))
        if not is_non_empty_string(padded[3]):
            errors.append(RowError(row_number, "department", "Department must be a non-empty string", padded[3]))
        if not is_bool_like(padded[4]):
            errors.append(
                RowError(row_number, "attendance", "Attendance must be TRUE or FALSE (or YES/NO, or boolean)", padded[4])
            )
        if commit_index != -1:
            value = padded[commit_index]
            if value not in (None, "") and not is_bool_like(value):
                errors.append(
                    RowError(
                        row_number,
                        "commit",
                        "Commit must be TRUE or FALSE (or YES/NO, or boolean) if provided",
                        value,
                    )
                )

    return validated, errors


class UploadService:
    """Use case: validate an event sheet and register it in the history log."""

    def __init__(
        self,
        sheets: AttendanceSheetRepository,
        history: HistoryRepository,
        *,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._sheets = sheets
        self._history = history
        self._clock = clock

    def _reject_duplicate(self, spreadsheet_id: str) -> None:
        existing = self._history.find_by_sheet_id(spreadsheet_id)
        if existing:
            raise ConflictError("This sheet has already been uploaded to the system", existing=existing.to_dict())

    def validate(self, sheet_link: Any) -> ValidationReport:
        spreadsheet_id = parse_sheet_link(sheet_link)
        self._reject_duplicate(spreadsheet_id)

        try:
            raw_headers = self._sheets.fetch_headers(spreadsheet_id)
        except SheetAccessError as e:
            raise SheetNotAccessibleError("Sheet is not accessible", reason=str(e)) from e

        headers = check_headers(raw_headers)
        snapshot = self._sheets.fetch_snapshot(spreadsheet_id)
        validated, errors = check_rows(headers, snapshot.rows)
        if errors:
            raise ValidationError("Data validation failed", details={"errors": [e.to_dict() for e in errors]})

        return ValidationReport(spreadsheet_id=spreadsheet_id, rows_validated=validated, headers=headers)

    def upload(self, sheet_link: Any, *, event_name: Any, uploaded_by: Any) -> HistoryRecord:
        if not sheet_link or not event_name or not uploaded_by:
            raise ValidationError(
                "Missing required fields: sheet_link (or sheetlink), event_name, and uploaded_by are required"
            )
        spreadsheet_id = parse_sheet_link(sheet_link)
        self._reject_duplicate(spreadsheet_id)

        try:
            sheet_name = self._sheets.fetch_title(spreadsheet_id)
        except SheetAccessError as e:
            raise SheetNotAccessibleError("Sheet is not accessible", reason=str(e)) from e

        record = HistoryRecord(
            sheet_name=sheet_name,
            sheet_link=str(sheet_link),
            sheet_id=spreadsheet_id,
            event_name=str(event_name).strip(),
            uploaded_by=str(uploaded_by).strip(),
            uploaded_at=to_iso(self._clock()),
            status=SessionStatus.ACTIVE.value,
            closed_at="",
        )
        self._history.append(record)
        logger.info("Sheet %s uploaded by %s for event %r", spreadsheet_id, record.uploaded_by, record.event_name)
        return record
