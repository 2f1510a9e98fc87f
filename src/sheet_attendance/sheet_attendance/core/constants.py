"""Constants and defaults.

Note: Keep sheet ranges and header names here to avoid magic strings spread across code.
"""

SHEETS_SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

DEFAULT_TAB = "Sheet1"
EVENT_DATA_RANGE = f"{DEFAULT_TAB}!A:Z"
EVENT_HEADER_RANGE = f"{DEFAULT_TAB}!A1:Z1"

USERS_RANGE = f"{DEFAULT_TAB}!A:I"
HISTORY_RANGE = f"{DEFAULT_TAB}!A:H"

USER_HEADERS = [
    "username",
    "name",
    "roll_number",
    "department",
    "team",
    "role",
    "password_hash",
    "salt",
    "admin",
]

HISTORY_HEADERS = [
    "sheet_name",
    "sheet_link",
    "sheet_id",
    "event_name",
    "uploaded_by",
    "uploaded_at",
    "status",
    "closed_at",
]

REQUIRED_EVENT_HEADERS = ["name", "roll_number", "mail_id", "department", "attendance"]

# Columns the backend owns; added to an event sheet on first fetch when missing.
# Order matters: this is the order they are appended in.
DERIVED_COLUMN_DEFAULTS = {
    "commit": False,
    "type": "REGISTERED",
    "marked_by": "",
}

MIN_PASSWORD_LENGTH = 6
