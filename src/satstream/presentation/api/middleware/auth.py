"""
Authentication middleware for JWT token validation.
"""

from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from satstream.di.container import get_container
from satstream.domain.entities.user import User
from satstream.domain.exceptions import InvalidTokenError
from satstream.domain.value_objects.actor import Actor
from satstream.infrastructure.auth.jwt_handler import extract_user_id

# Bearer token security scheme
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> User:
    """
    Load the authenticated user from the JWT bearer token.

    Returns:
        User domain entity

    Raises:
        InvalidTokenError: Missing, malformed or unknown-subject token
        ExpiredTokenError: Token past its expiry
    """
    if credentials is None:
        raise InvalidTokenError("Missing bearer token")

    user_id = extract_user_id(credentials.credentials)

    async with get_container().uow_factory() as uow:
        user = await uow.users.get_by_id(user_id)

    if user is None:
        raise InvalidTokenError("User not found")
    return user


async def get_current_actor(
    current_user: User = Depends(get_current_user),
) -> Actor:
    """
    Authenticated actor for ledger operations.

    Banned users are rejected here so no endpoint has to remember to.
    """
    actor = Actor.from_user(current_user)
    actor.ensure_active()
    return actor


async def get_current_user_id(
    current_user: User = Depends(get_current_user),
) -> UUID:
    """Convenience dependency for endpoints that only need user ID."""
    return current_user.id
