from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from ..sheets.columns import cell, parse_bool


@dataclass(frozen=True)
class User:
    """Domain entity: User, one row of the users sheet.

    Note: Plain data object (no sheet access code here).
    """

    username: str
    name: str
    roll_number: str
    department: str
    team: str
    role: str
    password_hash: str
    salt: str
    is_admin: bool = False

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "User":
        return cls(
            username=str(cell(row, 0)),
            name=str(cell(row, 1)),
            roll_number=str(cell(row, 2)),
            department=str(cell(row, 3)),
            team=str(cell(row, 4)),
            role=str(cell(row, 5)),
            password_hash=str(cell(row, 6)),
            salt=str(cell(row, 7)),
            is_admin=parse_bool(cell(row, 8, "FALSE")),
        )

    def to_row(self) -> list[Any]:
        roll: Any = int(self.roll_number) if self.roll_number.isdigit() else self.roll_number
        return [
            self.username,
            self.name,
            roll,
            self.department,
            self.team,
            self.role,
            self.password_hash,
            self.salt,
            "TRUE" if self.is_admin else "FALSE",
        ]

    def to_profile(self) -> dict:
        return {
            "username": self.username,
            "name": self.name,
            "roll_number": self.roll_number,
            "department": self.department,
            "team": self.team,
            "role": self.role,
            "is_admin": self.is_admin,
        }
