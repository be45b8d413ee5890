"""
Password Hashing

Email/password accounts store a bcrypt hash on the user document
(`passwordHash`). Plain-text passwords never leave this module.
"""

from typing import Optional

import bcrypt


class AuthError(Exception):
    """Base exception for authentication."""
    pass


class AuthenticationError(AuthError):
    """Wrong email or password."""
    pass


class AccountExistsError(AuthError):
    """An account with this email already exists."""
    pass


class PasswordHasher:
    """bcrypt hashing with a configurable work factor."""

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: Optional[str]) -> bool:
        """False for a missing or malformed hash rather than raising."""
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False
