# core/security.py
"""
Password hashing and JWT handling for dashboard logins.
"""
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
from jose import JWTError, jwt

from config import settings

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 12  # one working day
REFRESH_TOKEN_EXPIRE_DAYS = 7

_DEV_SECRET_KEY = "dev-secret-key-change-in-production"


def get_secret_key() -> str:
    """JWT secret from settings, or a fixed development key."""
    return getattr(settings, "SECRET_KEY", None) or _DEV_SECRET_KEY


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(
        plain_password.encode("utf-8"),
        hashed_password.encode("utf-8"),
    )


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def _encode(data: dict[str, Any], token_type: str, lifetime: timedelta) -> str:
    payload = dict(data)
    payload.update({
        "exp": datetime.now(timezone.utc) + lifetime,
        "type": token_type,
    })
    return jwt.encode(payload, get_secret_key(), algorithm=ALGORITHM)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Create a short-lived access token.

    Args:
        data: Claims to embed, at least ``sub`` (the user id as a string)
        expires_delta: Optional custom lifetime
    """
    return _encode(data, "access", expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(data: dict[str, Any]) -> str:
    return _encode(data, "refresh", timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))


def decode_token(token: str) -> dict[str, Any] | None:
    """Decoded claims, or None when the signature or expiry is invalid."""
    try:
        return jwt.decode(token, get_secret_key(), algorithms=[ALGORITHM])
    except JWTError:
        return None


def verify_token_type(token: str, expected_type: str) -> dict[str, Any] | None:
    payload = decode_token(token)
    if payload is None or payload.get("type") != expected_type:
        return None
    return payload
