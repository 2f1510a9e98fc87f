from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..core.constants import SHEETS_SCOPES
from ..core.exceptions import SheetAccessError

logger = logging.getLogger(__name__)


@dataclass
class SheetsConfig:
    users_spreadsheet_id: str
    history_spreadsheet_id: str
    credentials_file: Optional[str] = None
    credentials_json: Optional[str] = None
    scopes: list[str] = field(default_factory=lambda: list(SHEETS_SCOPES))


class SheetsClient:
    """Singleton-like gateway to the Google Sheets v4 API.

    Note: The discovery service is built lazily on first call so the app (and
    tests) can start without credentials on disk.
    """

    _instance: Optional["SheetsClient"] = None

    def __init__(self, config: SheetsConfig, *, service: Any = None):
        self._config = config
        self._service = service

    @classmethod
    def get_instance(cls, config: SheetsConfig) -> "SheetsClient":
        if cls._instance is None:
            cls._instance = SheetsClient(config)
        return cls._instance

    @property
    def config(self) -> SheetsConfig:
        return self._config

    def _credentials(self) -> Credentials:
        if self._config.credentials_json:
            info = json.loads(self._config.credentials_json)
            return Credentials.from_service_account_info(info, scopes=self._config.scopes)
        if self._config.credentials_file:
            return Credentials.from_service_account_file(self._config.credentials_file, scopes=self._config.scopes)
        raise SheetAccessError(
            "Google credentials are not configured (set GOOGLE_CREDENTIALS_JSON or GOOGLE_APPLICATION_CREDENTIALS)"
        )

    def _spreadsheets(self):
        if self._service is None:
            self._service = build("sheets", "v4", credentials=self._credentials(), cache_discovery=False)
        return self._service.spreadsheets()

    @staticmethod
    def _execute(request) -> dict:
        try:
            return request.execute() or {}
        except HttpError as e:
            status = getattr(e.resp, "status", None)
            logger.warning("Sheets API call failed (status=%s): %s", status, e)
            raise SheetAccessError(str(e), status=int(status) if status else None) from e

    def get_title(self, spreadsheet_id: str) -> str:
        meta = self._execute(self._spreadsheets().get(spreadsheetId=spreadsheet_id, fields="properties(title)"))
        return meta["properties"]["title"]

    def get_values(self, spreadsheet_id: str, a1_range: str) -> list[list[Any]]:
        result = self._execute(self._spreadsheets().values().get(spreadsheetId=spreadsheet_id, range=a1_range))
        return [list(row) for row in result.get("values", [])]

    def update_values(
        self,
        spreadsheet_id: str,
        a1_range: str,
        values: Sequence[Sequence[Any]],
        *,
        value_input_option: str = "USER_ENTERED",
    ) -> int:
        result = self._execute(
            self._spreadsheets()
            .values()
            .update(
                spreadsheetId=spreadsheet_id,
                range=a1_range,
                valueInputOption=value_input_option,
                body={"values": [list(r) for r in values]},
            )
        )
        return int(result.get("updatedCells", 0))

    def append_values(
        self,
        spreadsheet_id: str,
        a1_range: str,
        values: Sequence[Sequence[Any]],
        *,
        value_input_option: str = "USER_ENTERED",
    ) -> int:
        result = self._execute(
            self._spreadsheets()
            .values()
            .append(
                spreadsheetId=spreadsheet_id,
                range=a1_range,
                valueInputOption=value_input_option,
                insertDataOption="INSERT_ROWS",
                body={"values": [list(r) for r in values]},
            )
        )
        return int(result.get("updates", {}).get("updatedRows", 0))

    def batch_update_values(
        self,
        spreadsheet_id: str,
        data: Sequence[dict],
        *,
        value_input_option: str = "USER_ENTERED",
    ) -> int:
        if not data:
            return 0
        result = self._execute(
            self._spreadsheets()
            .values()
            .batchUpdate(
                spreadsheetId=spreadsheet_id,
                body={"valueInputOption": value_input_option, "data": list(data)},
            )
        )
        return int(result.get("totalUpdatedCells", 0))
