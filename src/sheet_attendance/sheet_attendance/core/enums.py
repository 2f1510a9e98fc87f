from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle of an uploaded event sheet in the history log."""

    ACTIVE = "active"
    COMPLETE = "Complete"


class StudentType(str, Enum):
    """How a student ended up on the attendance sheet."""

    REGISTERED = "REGISTERED"
    ON_SPOT = "ON-SPOT"


class PresenceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
