"""
Ledger store - the only code that writes user balances.
"""

from collections import defaultdict
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from satstream.domain.entities.transaction import (
    Transaction,
    TransactionStatus,
    TransactionType,
)
from satstream.domain.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    LedgerInvariantError,
)
from satstream.domain.repositories.i_ledger_store import ILedgerStore
from satstream.domain.repositories.i_transaction_repository import (
    ITransactionRepository,
)
from satstream.infrastructure.monitoring import get_logger, metrics
from satstream.infrastructure.persistence.models import UserModel
from satstream.infrastructure.persistence.repositories.transaction_repository import (
    pending_withdrawal_total,
)

logger = get_logger(__name__)


class LedgerStore(ILedgerStore):
    """
    SQLAlchemy ledger store bound to one session.

    Debits are compare-and-swap updates (balance minus in-flight
    withdrawals >= amount in the WHERE clause) so two writers can never
    both pass a stale balance check, and sats already sent to the node
    cannot be spent again. The store journals every balance change and
    every transaction it records or settles; verify_balanced() compares
    the two before the unit of work commits.
    """

    def __init__(self, session: AsyncSession, transactions: ITransactionRepository):
        """
        Initialize ledger store.

        Args:
            session: SQLAlchemy async session shared with the unit of work
            transactions: Transaction repository on the same session
        """
        self.session = session
        self.transactions = transactions
        self._applied: dict[UUID, int] = defaultdict(int)
        self._expected: dict[UUID, int] = defaultdict(int)

    async def get_balance(self, user_id: UUID) -> int:
        """Read the stored balance, bypassing any cached entity."""
        result = await self.session.execute(
            select(UserModel.balance).where(UserModel.id == user_id)
        )
        balance = result.scalar_one_or_none()
        if balance is None:
            raise EntityNotFoundError("User", str(user_id))
        return balance

    async def get_available_balance(
        self, user_id: UUID, exclude_id: Optional[UUID] = None
    ) -> int:
        """
        Stored balance minus the user's in-flight withdrawals.

        Args:
            user_id: User to read
            exclude_id: In-flight withdrawal not to hold back (the one
                being paid)

        Returns:
            Spendable sats
        """
        balance = await self.get_balance(user_id)
        reserved = await self.transactions.sum_pending_withdrawals(
            user_id, in_flight_only=True, exclude_id=exclude_id
        )
        return balance - reserved

    async def credit(self, user_id: UUID, amount: int) -> int:
        """
        Add sats to a balance.

        Args:
            user_id: User to credit
            amount: Positive amount in sats

        Returns:
            New balance
        """
        self._check_amount(amount)

        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(balance=UserModel.balance + amount)
            .returning(UserModel.balance)
            .execution_options(synchronize_session=False)
        )
        new_balance = (await self.session.execute(stmt)).scalar_one_or_none()
        if new_balance is None:
            raise EntityNotFoundError("User", str(user_id))

        self._applied[user_id] += amount
        return new_balance

    async def debit(self, user_id: UUID, amount: int) -> int:
        """
        Remove sats from a balance.

        Args:
            user_id: User to debit
            amount: Positive amount in sats

        Returns:
            New balance

        Raises:
            InsufficientFundsError: If amount exceeds the balance left
                after in-flight withdrawals
            EntityNotFoundError: If user does not exist
        """
        self._check_amount(amount)

        # A withdrawal settled in this unit of work is no longer pending
        reserved = pending_withdrawal_total(user_id, in_flight_only=True)
        stmt = (
            update(UserModel)
            .where(
                UserModel.id == user_id,
                UserModel.balance - reserved.scalar_subquery() >= amount,
            )
            .values(balance=UserModel.balance - amount)
            .returning(UserModel.balance)
            .execution_options(synchronize_session=False)
        )
        new_balance = (await self.session.execute(stmt)).scalar_one_or_none()
        if new_balance is None:
            available = await self.get_available_balance(user_id)
            raise InsufficientFundsError(required=amount, available=available)

        self._applied[user_id] -= amount
        return new_balance

    async def record_transaction(self, transaction: Transaction) -> Transaction:
        """
        Persist a new transaction and register the balance changes it implies.

        Raises:
            LedgerInvariantError: If the transaction is not in its
                creation state
        """
        if transaction.transaction_type == TransactionType.WITHDRAWAL:
            if not transaction.is_pending or transaction.is_in_flight:
                raise LedgerInvariantError(
                    "Withdrawals must be recorded as new pending requests"
                )
        elif transaction.status != TransactionStatus.COMPLETED:
            raise LedgerInvariantError(
                f"{transaction.transaction_type.value} must be recorded completed"
            )

        created = await self.transactions.create(transaction)

        if created.transaction_type == TransactionType.TIP:
            self._expected[created.sender_id] -= created.amount
            self._expected[created.receiver_id] += created.amount
        elif created.transaction_type == TransactionType.REWARD:
            self._expected[created.receiver_id] += created.amount

        return created

    async def settle_withdrawal(
        self, transaction: Transaction, claimed: bool = True
    ) -> bool:
        """
        Persist the terminal state of a pending withdrawal.

        Args:
            transaction: Withdrawal already moved to COMPLETED or DENIED
            claimed: Whether the stored row must carry a payment claim

        Returns:
            True if the stored row was still pending and got updated
        """
        if transaction.transaction_type != TransactionType.WITHDRAWAL:
            raise LedgerInvariantError("Only withdrawals can be settled")
        if transaction.is_pending:
            raise LedgerInvariantError("Settled withdrawal must be terminal")

        applied = await self.transactions.save_resolution(transaction, claimed)
        if applied and transaction.status == TransactionStatus.COMPLETED:
            self._expected[transaction.sender_id] -= transaction.amount

        return applied

    def verify_balanced(self) -> None:
        """
        Compare applied balance changes with recorded transactions.

        Raises:
            LedgerInvariantError: On any unbacked or missing change
        """
        mismatched = {
            user_id: (self._applied[user_id], self._expected[user_id])
            for user_id in set(self._applied) | set(self._expected)
            if self._applied[user_id] != self._expected[user_id]
        }
        if not mismatched:
            return

        metrics.ledger_invariant_violations_total.inc()
        details = ", ".join(
            f"{user_id}: applied {applied:+d} expected {expected:+d}"
            for user_id, (applied, expected) in mismatched.items()
        )
        logger.error(f"Unbalanced ledger unit of work: {details}")
        raise LedgerInvariantError(
            f"Balance changes not backed by transactions ({details})"
        )

    @staticmethod
    def _check_amount(amount: int) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise LedgerInvariantError(
                f"Ledger amounts must be positive integers, got {amount!r}"
            )
