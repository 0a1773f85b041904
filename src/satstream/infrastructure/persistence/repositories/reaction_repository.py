"""
Reaction repository implementation using SQLAlchemy.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from satstream.domain.entities.reaction import Reaction, ReactionType
from satstream.domain.repositories.i_reaction_repository import (
    IReactionRepository,
)
from satstream.infrastructure.persistence.models import ReactionModel


class ReactionRepository(IReactionRepository):
    """SQLAlchemy implementation of reaction repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, reaction: Reaction) -> Reaction:
        """
        Persist a reaction.

        Args:
            reaction: Reaction entity to persist

        Returns:
            Created reaction
        """
        model = ReactionModel(
            id=reaction.id,
            post_id=reaction.post_id,
            user_id=reaction.user_id,
            reaction_type=reaction.reaction_type.value,
            amount=reaction.amount,
            transaction_id=reaction.transaction_id,
            created_at=reaction.created_at,
        )
        self.session.add(model)
        await self.session.flush()

        return self._to_entity(model)

    async def list_for_post(self, post_id: UUID) -> list[Reaction]:
        stmt = (
            select(ReactionModel)
            .where(ReactionModel.post_id == post_id)
            .order_by(ReactionModel.created_at)
        )
        result = await self.session.execute(stmt)

        return [self._to_entity(model) for model in result.scalars()]

    def _to_entity(self, model: ReactionModel) -> Reaction:
        return Reaction(
            id=model.id,
            post_id=model.post_id,
            user_id=model.user_id,
            reaction_type=ReactionType(model.reaction_type),
            amount=model.amount,
            transaction_id=model.transaction_id,
            created_at=model.created_at,
        )
