"""Create an admin account in the users sheet.

Usage: python scripts/create_admin.py <username> <name> <password>
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

from src.sheet_attendance.sheet_attendance.container import build_container
from src.sheet_attendance.sheet_attendance.core.exceptions import DomainError


def main(argv: list[str]) -> int:
    if len(argv) != 3:
        print(__doc__.strip())
        return 2
    username, name, password = argv

    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(sheets_config=settings.SHEETS_CONFIG)

    try:
        user = container.user_service.create_user(
            username=username,
            name=name,
            password=password,
            role="admin",
            is_admin=True,
        )
    except DomainError as e:
        print(f"ERROR: {e}")
        return 1

    print(f"OK: admin {user.username!r} created")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
