"""Example: use the service layer directly (without Flask).

Goal: controllers are a thin layer, the use cases live in the services.
"""

import importlib

from config import get_settings_module

from src.sheet_attendance.sheet_attendance.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(sheets_config=settings.SHEETS_CONFIG)
    for record in container.history_service.list_history()[:5]:
        print(record.event_name, record.status, record.sheet_link)


if __name__ == "__main__":
    main()
