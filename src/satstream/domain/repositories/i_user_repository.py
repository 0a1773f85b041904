"""
User repository interface.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from uuid import UUID

from satstream.domain.entities.user import User


class IUserRepository(ABC):
    """
    Interface for user persistence operations.

    Balances are read-only here; the ledger store owns mutation.
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create new user.

        Args:
            user: User entity to create

        Returns:
            Created user entity

        Raises:
            DuplicateEntityError: If username or email is taken
        """

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User unique identifier

        Returns:
            User entity if found, None otherwise
        """

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""

    @abstractmethod
    async def get_many(self, user_ids: Iterable[UUID]) -> dict[UUID, User]:
        """
        Load several users in one query.

        Args:
            user_ids: Identifiers to load (duplicates and None ignored)

        Returns:
            Mapping of id to user for the ids that exist
        """

    @abstractmethod
    async def list_all(self) -> list[User]:
        """List all users ordered by creation time."""

    @abstractmethod
    async def set_banned(self, user_id: UUID, banned: bool) -> Optional[User]:
        """
        Update the ban flag.

        Returns:
            Updated user, or None if the user does not exist
        """
