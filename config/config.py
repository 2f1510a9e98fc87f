from __future__ import annotations

import os


def sheets_config_from_env() -> dict:
    """Google Sheets settings shared by every environment.

    ATTENDANCE_SHEET holds the users table, SHEET_HISTORY the upload log.
    Credentials come either inline (GOOGLE_CREDENTIALS_JSON) or from a
    service-account key file.
    """
    return {
        "users_spreadsheet_id": os.getenv("ATTENDANCE_SHEET", ""),
        "history_spreadsheet_id": os.getenv("SHEET_HISTORY", ""),
        "credentials_json": os.getenv("GOOGLE_CREDENTIALS_JSON", ""),
        "credentials_file": os.getenv(
            "GOOGLE_APPLICATION_CREDENTIALS",
            os.getenv("GOOGLE_CREDENTIALS_FILE", "credentials.json"),
        ),
    }


def cors_origins_from_env() -> list[str] | str:
    raw = os.getenv("CORS_ORIGINS", "*").strip()
    if raw == "*":
        return "*"
    return [o.strip() for o in raw.split(",") if o.strip()]
