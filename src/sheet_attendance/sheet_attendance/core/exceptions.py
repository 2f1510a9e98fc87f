from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, *, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class NotFoundError(DomainError):
    """Raised when a user, sheet or cached snapshot does not exist."""


class ConflictError(DomainError):
    """Raised on duplicates or illegal state transitions.

    ``existing`` carries the conflicting record when the caller should see it.
    """

    def __init__(self, message: str, *, existing: Any = None):
        super().__init__(message)
        self.existing = existing


class SheetAccessError(DomainError):
    """Raised when the Google Sheets API rejects a call."""

    def __init__(self, message: str, *, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class SheetNotAccessibleError(DomainError):
    """Raised when an uploaded event sheet cannot be read with the service account."""

    def __init__(self, message: str, *, reason: str = ""):
        super().__init__(message)
        self.reason = reason
