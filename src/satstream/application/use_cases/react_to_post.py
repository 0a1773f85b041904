"""
React to Post use case.

Likes are plain annotations. Tip reactions move sats to the post author
and record the reaction in the same atomic unit.
"""

from typing import Optional
from uuid import UUID

from satstream.application.use_cases.send_tip import transfer_tip
from satstream.application.validation import require_positive_sats
from satstream.domain.entities.reaction import Reaction, ReactionType
from satstream.domain.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    SelfTipError,
    ValidationError,
)
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.services.i_event_publisher import IEventPublisher
from satstream.domain.services.i_user_locks import IUserLocks
from satstream.domain.value_objects.actor import Actor
from satstream.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class ReactToPost:
    """
    Record a like or a tip on a post.

    Business rules:
    - LIKE carries no amount and never touches balances
    - TIP pays the post author; authors cannot tip their own posts
    - A TIP reaction and its tip transaction commit together or not at all
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        user_locks: IUserLocks,
        event_publisher: IEventPublisher,
    ):
        self.uow_factory = uow_factory
        self.user_locks = user_locks
        self.event_publisher = event_publisher

    async def execute(
        self,
        actor: Actor,
        post_id: UUID,
        reaction_type: ReactionType | str,
        amount: Optional[int] = None,
    ) -> Reaction:
        """
        Execute reaction.

        Args:
            actor: Authenticated user reacting
            post_id: Target post
            reaction_type: like or tip
            amount: Tip amount in sats (tips only)

        Returns:
            Created reaction

        Raises:
            ValidationError: Unknown type or bad amount
            EntityNotFoundError: Post does not exist
            SelfTipError: Author tipping own post
            InsufficientFundsError: Balance too low for the tip
        """
        actor.ensure_active()
        try:
            reaction_type = ReactionType(reaction_type)
        except ValueError:
            raise ValidationError("reaction_type", f"unknown type {reaction_type!r}")

        if reaction_type == ReactionType.LIKE:
            if amount is not None:
                raise ValidationError("amount", "likes do not carry an amount")
            return await self._like(actor, post_id)

        require_positive_sats(amount)
        return await self._tip(actor, post_id, amount)

    async def _like(self, actor: Actor, post_id: UUID) -> Reaction:
        async with self.uow_factory() as uow:
            post = await uow.posts.get_by_id(post_id)
            if post is None:
                raise EntityNotFoundError("Post", str(post_id))

            return await uow.reactions.create(
                Reaction(
                    post_id=post_id,
                    user_id=actor.id,
                    reaction_type=ReactionType.LIKE,
                )
            )

    async def _tip(self, actor: Actor, post_id: UUID, amount: int) -> Reaction:
        # Author never changes, so it is safe to resolve before locking
        async with self.uow_factory() as uow:
            post = await uow.posts.get_by_id(post_id)
        if post is None:
            raise EntityNotFoundError("Post", str(post_id))

        if post.user_id == actor.id:
            raise SelfTipError(str(actor.id))

        try:
            async with self.user_locks.hold(actor.id, post.user_id):
                async with self.uow_factory() as uow:
                    transaction, sender, receiver = await transfer_tip(
                        uow, actor.id, post.user_id, amount
                    )
                    reaction = await uow.reactions.create(
                        Reaction(
                            post_id=post_id,
                            user_id=actor.id,
                            reaction_type=ReactionType.TIP,
                            amount=amount,
                            transaction_id=transaction.id,
                        )
                    )
        except InsufficientFundsError:
            metrics.tips_total.labels(outcome="insufficient_funds").inc()
            raise

        metrics.tips_total.labels(outcome="completed").inc()
        metrics.tip_sats_total.inc(amount)
        logger.info(
            f"Tip reaction on post {post_id}: {sender.username} -> "
            f"{receiver.username} {amount} sats"
        )

        await self.event_publisher.publish_tip_received(
            amount=amount,
            from_username=sender.username,
            to_username=receiver.username,
            post_id=post_id,
        )

        return reaction
