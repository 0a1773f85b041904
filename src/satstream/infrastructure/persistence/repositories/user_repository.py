"""
User repository implementation using SQLAlchemy.
"""

from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from satstream.domain.entities.user import User
from satstream.domain.exceptions import DuplicateEntityError, ValidationError
from satstream.domain.repositories.i_user_repository import IUserRepository
from satstream.infrastructure.persistence.models import UserModel


class UserRepository(IUserRepository):
    """
    SQLAlchemy implementation of user repository.

    Reads always refresh from the database because the ledger store
    updates balances with bulk statements that bypass the identity map.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, user: User) -> User:
        """
        Create a new user in the database.

        Args:
            user: User entity to persist

        Returns:
            Created user

        Raises:
            DuplicateEntityError: If username or email already exists
            ValidationError: If the user does not start with a zero balance
        """
        if user.balance != 0:
            raise ValidationError("balance", "new users start with 0 sats")

        stmt = select(UserModel.id).where(
            or_(UserModel.username == user.username, UserModel.email == user.email)
        )
        if (await self.session.execute(stmt)).first() is not None:
            raise DuplicateEntityError(
                "User", f"username {user.username!r} or email {user.email!r}"
            )

        model = UserModel(
            id=user.id,
            username=user.username,
            email=user.email,
            balance=user.balance,
            is_admin=user.is_admin,
            is_banned=user.is_banned,
            created_at=user.created_at,
        )

        self.session.add(model)
        await self.session.flush()

        return self._to_entity(model)

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """
        Retrieve user by ID.

        Args:
            user_id: User unique identifier

        Returns:
            User entity if found, None otherwise
        """
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def get_by_username(self, username: str) -> Optional[User]:
        """Retrieve user by username."""
        stmt = (
            select(UserModel)
            .where(UserModel.username == username)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def get_many(self, user_ids: Iterable[UUID]) -> dict[UUID, User]:
        """Load several users in one query."""
        ids = {user_id for user_id in user_ids if user_id is not None}
        if not ids:
            return {}

        stmt = (
            select(UserModel)
            .where(UserModel.id.in_(ids))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)

        return {model.id: self._to_entity(model) for model in result.scalars()}

    async def list_all(self) -> list[User]:
        """List all users ordered by creation time."""
        stmt = (
            select(UserModel)
            .order_by(UserModel.created_at)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)

        return [self._to_entity(model) for model in result.scalars()]

    async def set_banned(self, user_id: UUID, banned: bool) -> Optional[User]:
        """Update the ban flag."""
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(is_banned=banned)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None

        return await self.get_by_id(user_id)

    def _to_entity(self, model: UserModel) -> User:
        """
        Convert database model to domain entity.

        Args:
            model: SQLAlchemy model

        Returns:
            User domain entity
        """
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            balance=model.balance,
            is_admin=model.is_admin,
            is_banned=model.is_banned,
            created_at=model.created_at,
        )
