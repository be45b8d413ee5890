"""Authentication services."""

from pesa_path.services.auth.passwords import (
    AccountExistsError,
    AuthenticationError,
    AuthError,
    PasswordHasher,
)

__all__ = [
    "AccountExistsError",
    "AuthenticationError",
    "AuthError",
    "PasswordHasher",
]
