from __future__ import annotations

import logging
from typing import Any

from ..common.validators import is_valid_integer, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .passwords import hash_password, verify_password
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: Any, password: Any) -> User:
        if not username or not password:
            raise ValidationError("Username and password are required")

        user = self._users.get_by_username(str(username).strip())
        if not user:
            raise AuthenticationError("Invalid credentials")

        if not verify_password(str(password), password_hash=user.password_hash, salt=user.salt):
            raise AuthenticationError("Invalid credentials")

        return user


class UserService:
    """Use case: create accounts (admin screen)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_user(
        self,
        *,
        username: Any,
        name: Any,
        password: Any,
        roll_number: Any = "",
        department: Any = "",
        team: Any = "",
        role: Any = "",
        is_admin: bool = False,
    ) -> User:
        username = require_non_empty(username, "Username")
        name = require_non_empty(name, "Name")
        if not password:
            raise ValidationError("Password is required")
        password = require_min_length(str(password), "Password", MIN_PASSWORD_LENGTH)

        roll = str(roll_number).strip() if roll_number is not None else ""
        if roll and not is_valid_integer(roll):
            raise ValidationError("Roll number must be a valid integer")

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        password_hash, salt = hash_password(password)
        user = User(
            username=username,
            name=name,
            roll_number=roll,
            department=str(department or "").strip(),
            team=str(team or "").strip(),
            role=str(role or "").strip(),
            password_hash=password_hash,
            salt=salt,
            is_admin=bool(is_admin),
        )
        if not self._users.create_user(user):
            raise RuntimeError("Failed to create user")

        logger.info("User %s created", username)
        return user


class ProfileService:
    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, username: Any) -> User:
        username = require_non_empty(username, "Username")
        user = self._users.get_by_username(username)
        if not user:
            raise NotFoundError("User not found")
        return user
