"""Authentication utilities."""

import uuid
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config import get_settings
from core.database import get_session
from core.exceptions import InvalidTokenError, TokenExpiredError
from core.logging import bind_user_context
from domain.user.models import User

settings = get_settings()

# JWT Bearer
security = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password."""
    password_bytes = password.encode("utf-8")
    # Truncate to 72 bytes if needed (bcrypt limitation)
    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash."""
    password_bytes = plain_password.encode("utf-8")
    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
    return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed session token for a user."""
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.jwt_expire_hours)

    now = datetime.utcnow()
    to_encode = {
        "sub": str(user.user_uid),
        "user_id": user.id,
        "user_uid": str(user.user_uid),
        "email": user.email,
        "name": user.name,
        "type": "access",
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict:
    """Decode and verify a JWT token."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise InvalidTokenError()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    session: AsyncSession = Depends(get_session),
) -> User:
    """Get the current authenticated user."""
    if credentials is None:
        raise InvalidTokenError()

    payload = decode_token(credentials.credentials)

    if payload.get("type") != "access":
        raise InvalidTokenError()

    try:
        user_uid = uuid.UUID(str(payload.get("user_uid") or payload.get("sub")))
    except ValueError:
        raise InvalidTokenError()

    result = await session.execute(
        select(User).where(User.user_uid == user_uid, User.is_active == True)  # noqa: E712
    )
    user = result.scalar_one_or_none()

    # Deactivated or removed since the token was issued
    if user is None:
        raise InvalidTokenError()

    bind_user_context(user.user_uid)
    return user
