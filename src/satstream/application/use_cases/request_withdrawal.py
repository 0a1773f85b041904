"""
Request Withdrawal use case.
"""

from uuid import UUID

from satstream.application.validation import require_positive_sats
from satstream.domain.entities.transaction import Transaction
from satstream.domain.exceptions import (
    InsufficientFundsError,
    InvalidDestinationError,
)
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.services.i_payment_executor import IPaymentExecutor
from satstream.domain.services.i_user_locks import IUserLocks
from satstream.domain.value_objects.actor import Actor
from satstream.domain.value_objects.destination_address import DestinationAddress
from satstream.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class RequestWithdrawal:
    """
    Record a pending request to pay sats out of the system.

    Business rules:
    - Destination must be a Lightning invoice or Bitcoin address
    - Balance, less withdrawals already being paid, must cover the
      amount at request time
    - No balance changes: funds are only debited when an admin approves
      and the payment succeeds
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        user_locks: IUserLocks,
        payment_executor: IPaymentExecutor,
    ):
        self.uow_factory = uow_factory
        self.user_locks = user_locks
        self.payment_executor = payment_executor

    async def execute(
        self, actor: Actor, destination_address: str, amount: int
    ) -> Transaction:
        """
        Execute withdrawal request.

        Args:
            actor: Authenticated requester
            destination_address: Lightning invoice or on-chain address
            amount: Amount in sats

        Returns:
            Pending withdrawal transaction

        Raises:
            ValidationError: If amount is invalid
            InvalidDestinationError: If destination format is unknown
            InsufficientFundsError: If balance does not cover amount
        """
        actor.ensure_active()
        require_positive_sats(amount)

        if not destination_address or not self.payment_executor.validate_address(
            destination_address
        ):
            raise InvalidDestinationError(destination_address or "")
        destination = DestinationAddress(destination_address)

        async with self.user_locks.hold(actor.id):
            async with self.uow_factory() as uow:
                available = await uow.ledger.get_available_balance(actor.id)
                if available < amount:
                    raise InsufficientFundsError(required=amount, available=available)

                transaction = await uow.ledger.record_transaction(
                    Transaction.withdrawal(
                        sender_id=actor.id,
                        destination_address=destination.normalized,
                        amount=amount,
                    )
                )

        metrics.withdrawals_total.labels(event="requested").inc()
        logger.info(
            f"Withdrawal {transaction.id} requested by {actor.id}: {amount} sats "
            f"to {'lightning' if destination.is_lightning else 'on-chain'}"
        )

        return transaction
