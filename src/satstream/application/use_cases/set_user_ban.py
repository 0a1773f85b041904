"""
Set User Ban use case.
"""

from uuid import UUID

from satstream.domain.entities.user import User
from satstream.domain.exceptions import EntityNotFoundError, ValidationError
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.value_objects.actor import Actor
from satstream.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class SetUserBan:
    """Ban or unban a user. Banned users cannot tip, react or withdraw."""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self.uow_factory = uow_factory

    async def execute(self, actor: Actor, user_id: UUID, banned: bool) -> User:
        actor.ensure_admin("set_user_ban")
        if user_id == actor.id:
            raise ValidationError("user_id", "admins cannot change their own ban")

        async with self.uow_factory() as uow:
            user = await uow.users.set_banned(user_id, banned)
            if user is None:
                raise EntityNotFoundError("User", str(user_id))

        logger.warning(
            f"User {user.username} {'banned' if banned else 'unbanned'} by {actor.id}"
        )
        return user
