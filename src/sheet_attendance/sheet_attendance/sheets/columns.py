"""Header lookup and cell normalization for loosely structured sheets.

Event sheets are filled in by hand, so columns are located by header text
(case-insensitive) rather than by position, and checkbox cells may come back
as booleans or as ``TRUE``/``FALSE``/``YES``/``NO`` strings.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, Optional, Sequence

_SPREADSHEET_ID_RE = re.compile(r"/spreadsheets/d/([a-zA-Z0-9-_]+)")

_TRUE_VALUES = {"TRUE", "YES"}
_BOOL_VALUES = {"TRUE", "FALSE", "YES", "NO"}


def extract_spreadsheet_id(url: Any) -> Optional[str]:
    if not url or not isinstance(url, str):
        return None
    match = _SPREADSHEET_ID_RE.search(url)
    return match.group(1) if match else None


def column_letter(index: int) -> str:
    """0 -> A, 25 -> Z, 26 -> AA."""
    if index < 0:
        raise ValueError(f"Column index must be >= 0, got {index}")
    letters = ""
    while index >= 0:
        letters = chr(index % 26 + 65) + letters
        index = index // 26 - 1
    return letters


def normalize_header(value: Any) -> str:
    return str(value).strip().lower() if value is not None else ""


def find_column(headers: Sequence[Any], *, exact: Iterable[str] = (), contains: Iterable[str] = ()) -> int:
    """Index of the first header equal to one of ``exact`` or containing one of ``contains``.

    Returns -1 when nothing matches.
    """
    exact_set = {e.lower() for e in exact}
    contains_list = [c.lower() for c in contains]
    for i, h in enumerate(headers):
        name = normalize_header(h)
        if not name:
            continue
        if name in exact_set or any(c in name for c in contains_list):
            return i
    return -1


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().upper() in _TRUE_VALUES
    return False


def is_bool_like(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, str):
        return value.strip().upper() in _BOOL_VALUES
    return False


def cell(row: Sequence[Any], index: int, default: Any = "") -> Any:
    """Read a cell from a ragged row (the API drops trailing empty cells)."""
    if index < 0 or index >= len(row):
        return default
    value = row[index]
    if value is None or value == "":
        return default
    return value
