"""
Deny Withdrawal use case.
"""

from uuid import UUID

from satstream.application.use_cases.withdrawal_lookup import (
    ensure_pending,
    load_withdrawal,
)
from satstream.domain.entities.transaction import Transaction
from satstream.domain.exceptions import TransactionNotPendingError
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.value_objects.actor import Actor
from satstream.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class DenyWithdrawal:
    """
    Reject a pending withdrawal without touching any balance.

    Withdrawals with a payment in flight cannot be denied here; they go
    through reconciliation once the payment outcome is known.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory):
        self.uow_factory = uow_factory

    async def execute(self, actor: Actor, transaction_id: UUID) -> Transaction:
        """
        Execute denial.

        Raises:
            AdminRequiredError: Actor is not an admin
            TransactionNotFoundError: Unknown withdrawal
            TransactionNotPendingError: Already resolved or in flight
        """
        actor.ensure_admin("deny_withdrawal")

        async with self.uow_factory() as uow:
            transaction = await load_withdrawal(uow, transaction_id)
            ensure_pending(transaction)
            if transaction.is_in_flight:
                raise TransactionNotPendingError(str(transaction_id), "processing")

            transaction.deny(actor.id)
            if not await uow.ledger.settle_withdrawal(transaction, claimed=False):
                raise TransactionNotPendingError(str(transaction_id), "processing")

        metrics.withdrawals_total.labels(event="denied").inc()
        logger.info(f"Withdrawal {transaction_id} denied by {actor.id}")

        return transaction
