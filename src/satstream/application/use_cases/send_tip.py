"""
Send Tip use case.

Instant peer-to-peer transfer between two internal balances.
"""

from typing import Optional
from uuid import UUID

from satstream.application.validation import require_positive_sats
from satstream.domain.entities.transaction import Transaction
from satstream.domain.entities.user import User
from satstream.domain.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    RecipientNotFoundError,
    SelfTipError,
)
from satstream.domain.repositories.i_ledger_store import (
    ILedgerUnitOfWork,
    UnitOfWorkFactory,
)
from satstream.domain.services.i_event_publisher import IEventPublisher
from satstream.domain.services.i_user_locks import IUserLocks
from satstream.domain.value_objects.actor import Actor
from satstream.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


async def transfer_tip(
    uow: ILedgerUnitOfWork,
    sender_id: UUID,
    receiver_id: UUID,
    amount: int,
    message: Optional[str] = None,
) -> tuple[Transaction, User, User]:
    """
    Debit sender, credit receiver and record the tip inside an open unit of work.

    Callers must hold both users' locks. Any error leaves the unit of
    work to roll back, so no partial transfer survives.

    Returns:
        (tip transaction, sender, receiver)

    Raises:
        EntityNotFoundError: If sender does not exist
        RecipientNotFoundError: If receiver does not exist
        InsufficientFundsError: If sender's stored balance is too low
    """
    sender = await uow.users.get_by_id(sender_id)
    if sender is None:
        raise EntityNotFoundError("User", str(sender_id))

    receiver = await uow.users.get_by_id(receiver_id)
    if receiver is None:
        raise RecipientNotFoundError(str(receiver_id))

    await uow.ledger.debit(sender_id, amount)
    await uow.ledger.credit(receiver_id, amount)
    transaction = await uow.ledger.record_transaction(
        Transaction.tip(sender_id, receiver_id, amount, message=message)
    )

    return transaction, sender, receiver


class SendTip:
    """
    Send sats from the acting user to another user.

    Business rules:
    - Amount must be a positive whole number of sats
    - Sender and receiver must differ
    - Sender's balance is re-read inside the atomic operation
    - Debit, credit and the completed tip record commit together
    - tip-received is published after commit, best-effort
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        user_locks: IUserLocks,
        event_publisher: IEventPublisher,
    ):
        """
        Initialize use case with dependencies.

        Args:
            uow_factory: Creates ledger units of work
            user_locks: Per-user lock registry
            event_publisher: Real-time notification publisher
        """
        self.uow_factory = uow_factory
        self.user_locks = user_locks
        self.event_publisher = event_publisher

    async def execute(
        self,
        actor: Actor,
        receiver_id: UUID,
        amount: int,
        message: Optional[str] = None,
    ) -> Transaction:
        """
        Execute tip transfer.

        Args:
            actor: Authenticated sender
            receiver_id: Recipient user id
            amount: Amount in sats
            message: Optional note stored on the transaction

        Returns:
            Completed tip transaction

        Raises:
            ValidationError: If amount is invalid
            SelfTipError: If actor tips themselves
            RecipientNotFoundError: If receiver does not exist
            InsufficientFundsError: If sender balance is too low
        """
        actor.ensure_active()
        require_positive_sats(amount)
        if actor.id == receiver_id:
            raise SelfTipError(str(actor.id))

        try:
            async with self.user_locks.hold(actor.id, receiver_id):
                async with self.uow_factory() as uow:
                    transaction, sender, receiver = await transfer_tip(
                        uow, actor.id, receiver_id, amount, message
                    )
        except InsufficientFundsError:
            metrics.tips_total.labels(outcome="insufficient_funds").inc()
            raise

        metrics.tips_total.labels(outcome="completed").inc()
        metrics.tip_sats_total.inc(amount)
        logger.info(
            f"Tip {transaction.id}: {sender.username} -> {receiver.username} "
            f"{amount} sats"
        )

        await self.event_publisher.publish_tip_received(
            amount=amount,
            from_username=sender.username,
            to_username=receiver.username,
        )

        return transaction
