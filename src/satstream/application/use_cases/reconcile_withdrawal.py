"""
Reconcile Withdrawal use case.

Resolves withdrawals whose payment outcome was unknown, after an
operator has checked the payment network.
"""

from enum import Enum
from typing import Optional
from uuid import UUID

from satstream.application.use_cases.withdrawal_lookup import (
    ensure_pending,
    load_withdrawal,
)
from satstream.domain.entities.transaction import Transaction
from satstream.domain.exceptions import (
    TransactionNotPendingError,
    ValidationError,
)
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.services.i_user_locks import IUserLocks
from satstream.domain.value_objects.actor import Actor
from satstream.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class ReconcileOutcome(str, Enum):
    """What the payment network says happened."""

    PAID = "paid"
    NOT_PAID = "not_paid"


class ReconcileWithdrawal:
    """
    Settle an in-flight withdrawal by hand.

    PAID completes the withdrawal and debits the requester atomically.
    NOT_PAID denies it and leaves the balance untouched.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory, user_locks: IUserLocks):
        self.uow_factory = uow_factory
        self.user_locks = user_locks

    async def execute(
        self,
        actor: Actor,
        transaction_id: UUID,
        outcome: ReconcileOutcome | str,
        external_transaction_id: Optional[str] = None,
    ) -> Transaction:
        """
        Execute reconciliation.

        Args:
            actor: Authenticated admin
            transaction_id: In-flight withdrawal
            outcome: paid or not_paid
            external_transaction_id: Payment reference when paid

        Returns:
            Resolved withdrawal

        Raises:
            ValidationError: Unknown outcome or withdrawal never attempted
            TransactionNotFoundError: Unknown withdrawal
            TransactionNotPendingError: Already resolved
            InsufficientFundsError: Requester no longer holds the amount
        """
        actor.ensure_admin("reconcile_withdrawal")
        try:
            outcome = ReconcileOutcome(outcome)
        except ValueError:
            raise ValidationError("outcome", f"unknown outcome {outcome!r}")

        async with self.uow_factory() as uow:
            transaction = await load_withdrawal(uow, transaction_id)
        ensure_pending(transaction)
        if not transaction.is_in_flight:
            raise ValidationError(
                "transaction_id",
                "withdrawal has no payment attempt; approve or deny it instead",
            )

        async with self.user_locks.hold(transaction.sender_id):
            async with self.uow_factory() as uow:
                transaction = await load_withdrawal(uow, transaction_id)
                ensure_pending(transaction)

                if outcome == ReconcileOutcome.PAID:
                    transaction.complete(external_transaction_id, actor.id)
                else:
                    transaction.deny(actor.id)

                if not await uow.ledger.settle_withdrawal(transaction, claimed=True):
                    raise TransactionNotPendingError(
                        str(transaction_id), "resolved concurrently"
                    )
                if outcome == ReconcileOutcome.PAID:
                    await uow.ledger.debit(transaction.sender_id, transaction.amount)

        metrics.withdrawals_total.labels(event=f"reconciled_{outcome.value}").inc()
        if outcome == ReconcileOutcome.PAID:
            metrics.withdrawal_sats_total.inc(transaction.amount)
        logger.info(
            f"Withdrawal {transaction_id} reconciled as {outcome.value} "
            f"by {actor.id}"
        )

        return transaction
