from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from ..attendance.cache import SnapshotCache
from ..attendance.model import AttendanceSummary, ExportFile, SheetSnapshot, StudentRecord
from ..attendance.reconcile import read_students, summarize
from ..attendance.repository import AttendanceSheetRepository
from ..attendance.service import make_export, parse_sheet_link, require_spreadsheet_id
from ..common.datetime_utils import now_utc, to_iso
from ..common.validators import require_non_empty
from ..core.enums import SessionStatus
from ..core.exceptions import ConflictError, NotFoundError
from .model import HistoryRecord
from .repository import HistoryRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EventDetails:
    """Read-model for the history/event page: counts plus every student with a roll number."""

    sheet_name: str
    spreadsheet_id: str
    summary: AttendanceSummary
    students: list[StudentRecord]

    @classmethod
    def from_snapshot(cls, snapshot: SheetSnapshot) -> "EventDetails":
        students = read_students(snapshot)
        return cls(
            sheet_name=snapshot.sheet_name,
            spreadsheet_id=snapshot.spreadsheet_id,
            summary=summarize(students),
            students=[s for s in students if s.roll_number],
        )

    def to_dict(self) -> dict:
        return {
            "sheet_name": self.sheet_name,
            "spreadsheet_id": self.spreadsheet_id,
            **self.summary.to_dict(),
            "students": [s.to_dict() for s in self.students],
        }


class HistoryService:
    """Use cases over the session log: listing, event stats, export, closing a session."""

    def __init__(
        self,
        history: HistoryRepository,
        sheets: AttendanceSheetRepository,
        *,
        event_cache: SnapshotCache[EventDetails],
        snapshot_cache: Optional[SnapshotCache] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._history = history
        self._sheets = sheets
        self._event_cache = event_cache
        self._snapshot_cache = snapshot_cache
        self._clock = clock

    def list_history(self) -> Sequence[HistoryRecord]:
        return self._history.list_all()

    def event_details(self, sheet_link: Any) -> tuple[EventDetails, bool]:
        """Returns ``(details, cached)``."""
        spreadsheet_id = parse_sheet_link(sheet_link)
        cached = self._event_cache.get(spreadsheet_id)
        if cached is not None:
            return cached, True

        details = EventDetails.from_snapshot(self._sheets.fetch_snapshot(spreadsheet_id))
        self._event_cache.set(spreadsheet_id, details)
        return details, False

    def export_event(self, spreadsheet_id: Any) -> ExportFile:
        spreadsheet_id = require_spreadsheet_id(spreadsheet_id)
        snapshot = self._sheets.fetch_snapshot(spreadsheet_id)
        # Export always reads fresh data, so refresh the stats cache while we have it.
        self._event_cache.set(spreadsheet_id, EventDetails.from_snapshot(snapshot))
        return make_export(snapshot, now=self._clock())

    def sessions_for(self, username: Any) -> Sequence[HistoryRecord]:
        username = require_non_empty(username, "Username")
        return self._history.list_by_uploader(username)

    def close_session(self, sheet_id: Any, *, username: Optional[str] = None) -> HistoryRecord:
        sheet_id = require_non_empty(sheet_id, "sheet_id")
        record = self._history.find_by_sheet_id(sheet_id)
        if not record:
            raise NotFoundError("Session not found")
        if record.is_complete:
            raise ConflictError("Session is already closed", existing=record.to_dict())

        closed_at = to_iso(self._clock())
        if not self._history.mark_complete(sheet_id, closed_at=closed_at):
            raise NotFoundError("Session not found")

        self._event_cache.invalidate(sheet_id)
        if self._snapshot_cache is not None:
            self._snapshot_cache.invalidate(sheet_id)
        logger.info("Session %s closed by %s", sheet_id, username or "-")

        return HistoryRecord(
            sheet_name=record.sheet_name,
            sheet_link=record.sheet_link,
            sheet_id=record.sheet_id,
            event_name=record.event_name,
            uploaded_by=record.uploaded_by,
            uploaded_at=record.uploaded_at,
            status=SessionStatus.COMPLETE.value,
            closed_at=closed_at,
            row_number=record.row_number,
        )
