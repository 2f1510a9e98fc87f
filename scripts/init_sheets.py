"""Write the header rows into empty users / history spreadsheets.

Safe to re-run: a sheet that already has a header row is left untouched.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.sheet_attendance.sheet_attendance.core.constants import (
    DEFAULT_TAB,
    HISTORY_HEADERS,
    HISTORY_RANGE,
    USER_HEADERS,
    USERS_RANGE,
)
from src.sheet_attendance.sheet_attendance.sheets.client import SheetsClient, SheetsConfig


def _ensure_headers(client: SheetsClient, spreadsheet_id: str, a1_range: str, headers: list[str]) -> str:
    if not spreadsheet_id:
        return "skipped (not configured)"
    existing = client.get_values(spreadsheet_id, a1_range)
    if existing and any(existing[0]):
        return f"kept existing header ({len(existing[0])} columns, {len(existing) - 1} rows)"
    client.update_values(spreadsheet_id, f"{DEFAULT_TAB}!A1", [headers], value_input_option="RAW")
    return f"wrote {len(headers)} headers"


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    cfg = dict(settings.SHEETS_CONFIG)
    client = SheetsClient(
        SheetsConfig(
            users_spreadsheet_id=cfg.get("users_spreadsheet_id", ""),
            history_spreadsheet_id=cfg.get("history_spreadsheet_id", ""),
            credentials_file=cfg.get("credentials_file") or None,
            credentials_json=cfg.get("credentials_json") or None,
        )
    )

    print("users:", _ensure_headers(client, client.config.users_spreadsheet_id, USERS_RANGE, USER_HEADERS))
    print("history:", _ensure_headers(client, client.config.history_spreadsheet_id, HISTORY_RANGE, HISTORY_HEADERS))


if __name__ == "__main__":
    main()
