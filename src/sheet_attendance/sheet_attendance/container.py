from __future__ import annotations

from dataclasses import dataclass

from .attendance.cache import SnapshotCache
from .attendance.google_attendance_repository import GoogleAttendanceSheetRepository
from .attendance.model import SheetSnapshot
from .attendance.repository import AttendanceSheetRepository
from .attendance.service import AttendanceService
from .history.google_history_repository import GoogleHistoryRepository
from .history.repository import HistoryRepository
from .history.service import EventDetails, HistoryService
from .sheets.client import SheetsClient, SheetsConfig
from .upload.service import UploadService
from .users.google_user_repository import GoogleUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, ProfileService, UserService


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceSheetRepository
    history_repo: HistoryRepository
    users_repo: UserRepository

    snapshot_cache: SnapshotCache[SheetSnapshot]
    event_cache: SnapshotCache[EventDetails]

    auth_service: AuthService
    user_service: UserService
    profile_service: ProfileService
    attendance_service: AttendanceService
    upload_service: UploadService
    history_service: HistoryService


def wire(
    *,
    attendance_repo: AttendanceSheetRepository,
    history_repo: HistoryRepository,
    users_repo: UserRepository,
) -> Container:
    """Build services on top of any repository implementations (Google-backed or in-memory)."""
    snapshot_cache: SnapshotCache[SheetSnapshot] = SnapshotCache()
    event_cache: SnapshotCache[EventDetails] = SnapshotCache()

    return Container(
        attendance_repo=attendance_repo,
        history_repo=history_repo,
        users_repo=users_repo,
        snapshot_cache=snapshot_cache,
        event_cache=event_cache,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        profile_service=ProfileService(users_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            snapshot_cache=snapshot_cache,
            event_cache=event_cache,
        ),
        upload_service=UploadService(attendance_repo, history_repo),
        history_service=HistoryService(
            history_repo,
            attendance_repo,
            event_cache=event_cache,
            snapshot_cache=snapshot_cache,
        ),
    )


def build_container(*, sheets_config: dict) -> Container:
    config = SheetsConfig(
        users_spreadsheet_id=str(sheets_config.get("users_spreadsheet_id") or ""),
        history_spreadsheet_id=str(sheets_config.get("history_spreadsheet_id") or ""),
        credentials_file=sheets_config.get("credentials_file") or None,
        credentials_json=sheets_config.get("credentials_json") or None,
    )
    client = SheetsClient.get_instance(config)

    return wire(
        attendance_repo=GoogleAttendanceSheetRepository(client),
        history_repo=GoogleHistoryRepository(client, config.history_spreadsheet_id),
        users_repo=GoogleUserRepository(client, config.users_spreadsheet_id),
    )
