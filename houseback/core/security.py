"""
Security: password hashing and JWT issuing.
Challenge: No plain-text passwords anywhere, tunable work factor.
"""

from datetime import datetime, timezone, timedelta
from typing import Any

from jose import jwt
from passlib.context import CryptContext

from houseback.config import Settings
from houseback.core.errors import HashingFailure


class PasswordHasher:
    """Salted bcrypt hashing. The only component that ever sees a plaintext password."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, plaintext: str) -> str:
        """One-way hash for storage."""
        try:
            return self._context.hash(plaintext)
        except (ValueError, TypeError, RuntimeError) as exc:
            raise HashingFailure("password hashing failed") from exc

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Constant-time comparison for signin."""
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError, RuntimeError) as exc:
            raise HashingFailure("password verification failed") from exc

    def dummy_verify(self) -> None:
        """Burn one verification worth of time when there is no hash to check against."""
        self._context.dummy_verify()


def create_access_token(
    subject: str | Any, settings: Settings, extra: dict[str, Any] | None = None
) -> str:
    """Create JWT for an authenticated user. Subject is the user id."""
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)
    to_encode = {"sub": str(subject), "exp": expire}
    if extra:
        to_encode.update(extra)
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)

