"""
Post repository implementation using SQLAlchemy.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from satstream.domain.entities.post import Post
from satstream.domain.repositories.i_post_repository import IPostRepository
from satstream.infrastructure.persistence.models import PostModel


class PostRepository(IPostRepository):
    """SQLAlchemy implementation of post repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, post: Post) -> Post:
        model = PostModel(
            id=post.id,
            user_id=post.user_id,
            content=post.content,
            created_at=post.created_at,
        )
        self.session.add(model)
        await self.session.flush()

        return self._to_entity(model)

    async def get_by_id(self, post_id: UUID) -> Optional[Post]:
        result = await self.session.execute(
            select(PostModel).where(PostModel.id == post_id)
        )
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    def _to_entity(self, model: PostModel) -> Post:
        return Post(
            id=model.id,
            user_id=model.user_id,
            content=model.content,
            created_at=model.created_at,
        )
