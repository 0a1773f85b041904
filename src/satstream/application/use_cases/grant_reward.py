"""
Grant Reward use case.

The only way sats enter the internal ledger.
"""

from typing import Optional
from uuid import UUID

from satstream.application.validation import require_positive_sats
from satstream.domain.entities.transaction import Transaction
from satstream.domain.exceptions import RecipientNotFoundError
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.services.i_user_locks import IUserLocks
from satstream.domain.value_objects.actor import Actor
from satstream.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class GrantReward:
    """Credit a user with a completed system reward."""

    def __init__(self, uow_factory: UnitOfWorkFactory, user_locks: IUserLocks):
        self.uow_factory = uow_factory
        self.user_locks = user_locks

    async def execute(
        self,
        receiver_id: UUID,
        amount: int,
        message: Optional[str] = None,
        actor: Optional[Actor] = None,
    ) -> Transaction:
        """
        Execute reward credit.

        Args:
            receiver_id: User to credit
            amount: Amount in sats
            message: Optional reason
            actor: Granting admin; None for operator scripts

        Raises:
            AdminRequiredError: Actor given but not an admin
            ValidationError: Invalid amount
            RecipientNotFoundError: Unknown receiver
        """
        if actor is not None:
            actor.ensure_admin("grant_reward")
        require_positive_sats(amount)

        async with self.user_locks.hold(receiver_id):
            async with self.uow_factory() as uow:
                if await uow.users.get_by_id(receiver_id) is None:
                    raise RecipientNotFoundError(str(receiver_id))

                await uow.ledger.credit(receiver_id, amount)
                transaction = await uow.ledger.record_transaction(
                    Transaction.reward(receiver_id, amount, message=message)
                )

        logger.info(f"Reward {transaction.id}: {amount} sats to {receiver_id}")
        return transaction
