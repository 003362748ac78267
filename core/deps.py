# core/deps.py
"""
FastAPI dependencies for authentication.

Every business endpoint only requires a logged-in, active user.
"""
from typing import Annotated, Any

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from db_models.user import User
from core.security import verify_token_type

# OAuth2 scheme for token extraction from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


class AuthenticationError(HTTPException):
    """Raised when authentication fails."""
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_user_by_token_subject(db: AsyncSession, subject: Any) -> User | None:
    try:
        user_id = int(subject)
    except (ValueError, TypeError):
        return None
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_current_user(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    db: AsyncSession = Depends(get_session),
) -> User:
    """
    Resolve the bearer token to an active user.

    Raises:
        AuthenticationError: If token is missing, invalid, or user not found/disabled
    """
    if token is None:
        raise AuthenticationError("Not authenticated")

    payload = verify_token_type(token, "access")
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    user = await get_user_by_token_subject(db, payload.get("sub"))
    if user is None:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise AuthenticationError("User account is disabled")

    return user


# Type alias for cleaner endpoint signatures
CurrentUser = Annotated[User, Depends(get_current_user)]
