"""Bearer token helpers built on python-jose."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import jwt

from shutter_stage.core.settings import settings


def create_access_token(user_id: int, expires_delta: timedelta | None = None) -> str:
    """Return a signed JWT whose subject is the user identifier.

    Args:
        user_id: Primary key of the user the token represents.
        expires_delta: Optional lifetime override.

    Returns:
        Encoded JWT string.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "sub": str(user_id),
        "exp": datetime.now(UTC) + expires_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, object]:
    """Decode and verify a JWT, raising `jose.JWTError` when it is invalid."""
    return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
