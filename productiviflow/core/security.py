"""Security utilities for password hashing and JWT handling."""
from __future__ import annotations

from datetime import timedelta
from typing import Any, Dict

import bcrypt
from jose import JWTError, jwt

from productiviflow.config import settings
from productiviflow.utils.dates import utcnow

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class InvalidTokenError(Exception):
    """Raised when a JWT cannot be decoded or is invalid."""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Validate a plaintext password against a hashed value."""

    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""

    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def _create_token(subject: Any, expires_delta: timedelta, token_type: str) -> str:
    payload: Dict[str, Any] = {
        "exp": utcnow() + expires_delta,
        "sub": str(subject),
        "type": token_type,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(subject: Any, expires_minutes: int | None = None) -> str:
    """Create a signed access token for the supplied user id."""

    minutes = expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    return _create_token(subject, timedelta(minutes=minutes), ACCESS_TOKEN_TYPE)


def create_refresh_token(subject: Any, expires_days: int | None = None) -> str:
    """Create a signed refresh token for the supplied user id."""

    days = expires_days or settings.REFRESH_TOKEN_EXPIRE_DAYS
    return _create_token(subject, timedelta(days=days), REFRESH_TOKEN_TYPE)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode a JWT and return its payload, raising ``InvalidTokenError`` if invalid."""

    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise InvalidTokenError(str(exc)) from exc
