SECRET_KEY = "test-secret"

SHEETS_CONFIG = {
    "users_spreadsheet_id": "users-sheet",
    "history_spreadsheet_id": "history-sheet",
    "credentials_json": "",
    "credentials_file": "",
}

CORS_ORIGINS = "*"

PORT = 3000

DEBUG = False
TESTING = True
