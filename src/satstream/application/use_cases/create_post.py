"""
Create Post use case.
"""

from satstream.domain.entities.post import Post
from satstream.domain.exceptions import EntityNotFoundError, ValidationError
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.value_objects.actor import Actor


class CreatePost:
    """Publish a post that other users can like or tip."""

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self.uow_factory = uow_factory

    async def execute(self, actor: Actor, content: str) -> Post:
        actor.ensure_active()
        try:
            post = Post(user_id=actor.id, content=content)
        except ValueError as e:
            raise ValidationError("content", str(e))

        async with self.uow_factory() as uow:
            if await uow.users.get_by_id(actor.id) is None:
                raise EntityNotFoundError("User", str(actor.id))
            return await uow.posts.create(post)
