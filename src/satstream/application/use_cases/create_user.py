"""
Create User use case.
"""

from satstream.domain.entities.user import User
from satstream.domain.exceptions import ValidationError
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class CreateUser:
    """Register a user with an empty balance."""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self.uow_factory = uow_factory

    async def execute(self, username: str, email: str, is_admin: bool = False) -> User:
        """
        Raises:
            ValidationError: Invalid username or email
            DuplicateEntityError: Username or email taken
        """
        try:
            user = User(username=username, email=email, is_admin=is_admin)
        except ValueError as e:
            raise ValidationError("user", str(e))

        async with self.uow_factory() as uow:
            user = await uow.users.create(user)

        logger.info(f"User created: {user.username}")
        return user
