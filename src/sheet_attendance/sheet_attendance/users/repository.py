from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Note (DIP): the service layer depends on this interface, not on a concrete sheet.
    """

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, user: User) -> bool:
        raise NotImplementedError
