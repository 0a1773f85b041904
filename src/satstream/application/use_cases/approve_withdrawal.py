"""
Approve Withdrawal use case.

Pays a pending withdrawal through the payment executor and debits the
requester only after the payment is confirmed.
"""

import asyncio
from functools import partial
from uuid import UUID

from satstream.application.use_cases.withdrawal_lookup import (
    ensure_pending,
    load_withdrawal,
)
from satstream.domain.entities.transaction import Transaction
from satstream.domain.exceptions import (
    InsufficientFundsError,
    PaymentExecutorError,
    PaymentExecutorUnavailableError,
    PaymentFailedError,
    SatStreamException,
    TransactionNotPendingError,
)
from satstream.domain.repositories.i_ledger_store import UnitOfWorkFactory
from satstream.domain.services.i_payment_executor import (
    IPaymentExecutor,
    PaymentResult,
)
from satstream.domain.services.i_user_locks import IUserLocks
from satstream.domain.value_objects.actor import Actor
from satstream.domain.value_objects.destination_address import DestinationAddress
from satstream.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


def _log_late_outcome(transaction_id: UUID, task: asyncio.Future) -> None:
    """Record what a timed-out payment call eventually returned."""
    if task.cancelled():
        logger.warning(f"Late payment call for {transaction_id} was cancelled")
        return

    error = task.exception()
    if error is not None:
        logger.error(f"Late payment call for {transaction_id} failed: {error}")
        return

    result = task.result()
    logger.warning(
        f"Late payment outcome for {transaction_id}: success={result.success} "
        f"external_id={result.external_transaction_id} error={result.error}. "
        f"Withdrawal awaits reconciliation."
    )


class ApproveWithdrawal:
    """
    Admin approval of a pending withdrawal.

    Flow:
    1. Claim the withdrawal (pending -> in flight) in its own commit so a
       second approver sees it as being processed
    2. Re-check the requester's balance, less other in-flight
       withdrawals; deny if it no longer covers the amount
    3. Pay through the executor with a timeout
    4. On confirmed success, mark completed and debit atomically

    Outcomes:
    - Executor unreachable or payment rejected: withdrawal DENIED,
      balance untouched, PaymentFailedError
    - Outcome unknown (timeout, 5xx, dropped connection): withdrawal
      left pending and in flight, PaymentFailedError with
      requires_reconciliation
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        user_locks: IUserLocks,
        payment_executor: IPaymentExecutor,
        payment_timeout: float = 30.0,
    ):
        """
        Initialize use case with dependencies.

        Args:
            uow_factory: Creates ledger units of work
            user_locks: Per-user lock registry
            payment_executor: Lightning/on-chain payout capability
            payment_timeout: Seconds to wait for the executor
        """
        self.uow_factory = uow_factory
        self.user_locks = user_locks
        self.payment_executor = payment_executor
        self.payment_timeout = payment_timeout

    async def execute(self, actor: Actor, transaction_id: UUID) -> Transaction:
        """
        Execute approval.

        Args:
            actor: Authenticated admin
            transaction_id: Withdrawal to approve

        Returns:
            Completed withdrawal

        Raises:
            AdminRequiredError: Actor is not an admin
            TransactionNotFoundError: Unknown withdrawal
            TransactionNotPendingError: Already resolved or in flight
            InsufficientFundsError: Balance no longer covers the amount
            PaymentFailedError: Payment not confirmed
        """
        actor.ensure_admin("approve_withdrawal")

        async with self.uow_factory() as uow:
            sender_id = (await load_withdrawal(uow, transaction_id)).sender_id

        # Claim, balance check and debit for one sender are serialized
        async with self.user_locks.hold(sender_id):
            transaction = await self._claim(transaction_id)

            await self._recheck_balance(actor, transaction)

            result = await self._pay_or_fail(actor, transaction)

            await self._finalize(actor, transaction, result)

        metrics.withdrawals_total.labels(event="approved").inc()
        metrics.withdrawal_sats_total.inc(transaction.amount)
        logger.info(
            f"Withdrawal {transaction.id} paid: {transaction.amount} sats, "
            f"external id {transaction.external_transaction_id}"
        )

        return transaction

    async def _claim(self, transaction_id: UUID) -> Transaction:
        async with self.uow_factory() as uow:
            transaction = await load_withdrawal(uow, transaction_id)
            ensure_pending(transaction)
            if transaction.is_in_flight:
                raise TransactionNotPendingError(str(transaction_id), "processing")

            transaction.start_processing()
            if not await uow.transactions.save_claim(transaction):
                raise TransactionNotPendingError(str(transaction_id), "processing")

        return transaction

    async def _recheck_balance(self, actor: Actor, transaction: Transaction) -> None:
        async with self.uow_factory() as uow:
            available = await uow.ledger.get_available_balance(
                transaction.sender_id, exclude_id=transaction.id
            )
            if available >= transaction.amount:
                return

            transaction.deny(actor.id)
            await uow.ledger.settle_withdrawal(transaction, claimed=True)

        metrics.withdrawals_total.labels(event="denied").inc()
        logger.warning(
            f"Withdrawal {transaction.id} denied at approval: balance "
            f"{available} below {transaction.amount}"
        )
        raise InsufficientFundsError(required=transaction.amount, available=available)

    async def _pay_or_fail(
        self, actor: Actor, transaction: Transaction
    ) -> PaymentResult:
        transaction_id = str(transaction.id)
        try:
            result = await self._pay(transaction)
        except asyncio.TimeoutError:
            self._mark_reconciliation(transaction, "timed out")
            raise PaymentFailedError(
                f"payment executor timed out after {self.payment_timeout}s",
                transaction_id=transaction_id,
                requires_reconciliation=True,
            )
        except PaymentExecutorUnavailableError as e:
            await self._deny_claimed(actor, transaction, e.message)
            raise PaymentFailedError(e.message, transaction_id=transaction_id) from e
        except PaymentExecutorError as e:
            self._mark_reconciliation(transaction, e.message)
            raise PaymentFailedError(
                e.message,
                transaction_id=transaction_id,
                requires_reconciliation=True,
            ) from e
        except Exception as e:
            logger.exception(f"Unexpected payment error for {transaction_id}")
            self._mark_reconciliation(transaction, str(e))
            raise PaymentFailedError(
                str(e),
                transaction_id=transaction_id,
                requires_reconciliation=True,
            ) from e

        if not result.success:
            reason = result.error or "payment rejected"
            await self._deny_claimed(actor, transaction, reason)
            raise PaymentFailedError(reason, transaction_id=transaction_id)

        return result

    async def _pay(self, transaction: Transaction) -> PaymentResult:
        destination = DestinationAddress(transaction.destination_address)
        if destination.is_lightning:
            call = self.payment_executor.send_payment(destination.normalized)
        else:
            call = self.payment_executor.send_onchain(
                destination.normalized, transaction.amount
            )

        task = asyncio.ensure_future(call)
        try:
            # Shielded: a timeout must not cancel a payment already sent
            return await asyncio.wait_for(asyncio.shield(task), self.payment_timeout)
        except asyncio.TimeoutError:
            task.add_done_callback(partial(_log_late_outcome, transaction.id))
            raise

    async def _deny_claimed(
        self, actor: Actor, transaction: Transaction, reason: str
    ) -> None:
        async with self.uow_factory() as uow:
            transaction.deny(actor.id)
            await uow.ledger.settle_withdrawal(transaction, claimed=True)

        metrics.withdrawals_total.labels(event="failed").inc()
        logger.warning(f"Withdrawal {transaction.id} denied: {reason}")

    def _mark_reconciliation(self, transaction: Transaction, reason: str) -> None:
        metrics.withdrawals_total.labels(event="reconciliation").inc()
        logger.error(
            f"Withdrawal {transaction.id} outcome unknown ({reason}); "
            f"left pending for reconciliation"
        )

    async def _finalize(
        self, actor: Actor, transaction: Transaction, result: PaymentResult
    ) -> None:
        transaction.complete(result.external_transaction_id, actor.id)
        try:
            async with self.uow_factory() as uow:
                if not await uow.ledger.settle_withdrawal(transaction, claimed=True):
                    raise TransactionNotPendingError(
                        str(transaction.id), "resolved concurrently"
                    )
                await uow.ledger.debit(transaction.sender_id, transaction.amount)
        except SatStreamException as e:
            metrics.withdrawals_total.labels(event="reconciliation").inc()
            logger.critical(
                f"Withdrawal {transaction.id} paid (external id "
                f"{result.external_transaction_id}) but not recorded: {e.message}"
            )
            raise PaymentFailedError(
                f"payment sent but ledger update failed: {e.message}",
                transaction_id=str(transaction.id),
                requires_reconciliation=True,
            ) from e