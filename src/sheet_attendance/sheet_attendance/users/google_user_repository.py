from __future__ import annotations

from typing import Optional

from ..core.constants import USERS_RANGE
from ..core.exceptions import SheetAccessError
from ..sheets.client import SheetsClient
from .model import User
from .repository import UserRepository


class GoogleUserRepository(UserRepository):
    def __init__(self, client: SheetsClient, spreadsheet_id: str):
        self._client = client
        self._spreadsheet_id = spreadsheet_id

    def _sheet_id(self) -> str:
        if not self._spreadsheet_id:
            raise SheetAccessError("ATTENDANCE_SHEET environment variable is not set")
        return self._spreadsheet_id

    def get_by_username(self, username: str) -> Optional[User]:
        rows = self._client.get_values(self._sheet_id(), USERS_RANGE)
        for row in rows[1:]:
            if row and str(row[0]) == username:
                return User.from_row(row)
        return None

    def create_user(self, user: User) -> bool:
        updated = self._client.append_values(self._sheet_id(), USERS_RANGE, [user.to_row()], value_input_option="RAW")
        return updated > 0
