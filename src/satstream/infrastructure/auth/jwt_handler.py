"""
JWT token handler for authentication.
Provides token creation, validation, and user extraction.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from satstream.config.settings import get_settings
from satstream.domain.exceptions.auth import ExpiredTokenError, InvalidTokenError


def create_access_token(user_id: UUID, username: str) -> str:
    """
    Create JWT access token for authenticated user.

    Args:
        user_id: User UUID
        username: Username, carried for logging only

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token(user_id=UUID("..."), username="satoshi")
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    payload = {
        "sub": str(user_id),
        "username": username,
        "iat": now,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(
        payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
    )


def decode_access_token(token: str) -> Dict[str, str]:
    """
    Decode and validate JWT access token.

    Args:
        token: JWT token string

    Returns:
        Dictionary with user_id and username

    Raises:
        ExpiredTokenError: If token has expired
        InvalidTokenError: If token is invalid or malformed
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError:
        raise ExpiredTokenError()
    except JWTError:
        raise InvalidTokenError()

    user_id = payload.get("sub")
    if not user_id or payload.get("type") != "access":
        raise InvalidTokenError()

    return {
        "user_id": user_id,
        "username": payload.get("username", ""),
    }


def extract_user_id(token: str) -> UUID:
    """
    Extract user ID from token.

    Raises:
        InvalidTokenError: If token is invalid or subject is not a UUID
    """
    payload = decode_access_token(token)
    try:
        return UUID(payload["user_id"])
    except ValueError:
        raise InvalidTokenError()
