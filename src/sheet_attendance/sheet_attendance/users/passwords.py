"""Password hashing for rows of the users sheet.

New accounts get a werkzeug hash; the salt column mirrors the salt embedded in
it. Rows created before that store a hex salt and ``sha256(salt + password)``
as hex, and still verify.
"""
from __future__ import annotations

import hashlib
import hmac

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> tuple[str, str]:
    """Returns ``(password_hash, salt)``."""
    password_hash = generate_password_hash(password)
    _, salt, _ = password_hash.split("$", 2)
    return password_hash, salt


def _legacy_sha256(salt_hex: str, password: str) -> str:
    return hashlib.sha256(bytes.fromhex(salt_hex) + password.encode("utf-8")).hexdigest()


def verify_password(password: str, *, password_hash: str, salt: str) -> bool:
    if not password_hash or password is None:
        return False

    if "$" in password_hash:
        try:
            return check_password_hash(password_hash, password)
        except ValueError:
            return False

    try:
        candidate = _legacy_sha256(salt or "", password)
    except ValueError:
        # salt column is not hex
        return False
    return hmac.compare_digest(candidate, password_hash.lower())
