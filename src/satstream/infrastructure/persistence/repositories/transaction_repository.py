"""
Transaction repository implementation using SQLAlchemy.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import Select, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from satstream.domain.entities.transaction import (
    Transaction,
    TransactionStatus,
    TransactionType,
)
from satstream.domain.repositories.i_transaction_repository import (
    ITransactionRepository,
)
from satstream.infrastructure.persistence.models import TransactionModel


def pending_withdrawal_total(
    sender_id: UUID,
    in_flight_only: bool = False,
    exclude_id: Optional[UUID] = None,
) -> Select:
    """
    SELECT of the summed amount of a sender's pending withdrawals.

    Shared with the ledger store, which embeds it as a scalar subquery
    in its compare-and-swap debit.
    """
    conditions = [
        TransactionModel.sender_id == sender_id,
        TransactionModel.transaction_type == TransactionType.WITHDRAWAL.value,
        TransactionModel.status == TransactionStatus.PENDING.value,
    ]
    if in_flight_only:
        conditions.append(TransactionModel.processing_started_at.is_not(None))
    if exclude_id is not None:
        conditions.append(TransactionModel.id != exclude_id)

    return select(func.coalesce(func.sum(TransactionModel.amount), 0)).where(
        *conditions
    )


class TransactionRepository(ITransactionRepository):
    """
    SQLAlchemy implementation of transaction repository.

    Handles Transaction entity persistence. Claims and resolutions are
    single conditional UPDATE statements checked by rowcount.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def create(self, transaction: Transaction) -> Transaction:
        """
        Create a new transaction in the database.

        Args:
            transaction: Transaction entity to persist

        Returns:
            Created transaction
        """
        model = TransactionModel(
            id=transaction.id,
            sender_id=transaction.sender_id,
            receiver_id=transaction.receiver_id,
            transaction_type=transaction.transaction_type.value,
            amount=transaction.amount,
            status=transaction.status.value,
            destination_address=transaction.destination_address,
            external_transaction_id=transaction.external_transaction_id,
            admin_id=transaction.admin_id,
            message=transaction.message,
            processing_started_at=transaction.processing_started_at,
            resolved_at=transaction.resolved_at,
            created_at=transaction.created_at,
        )

        self.session.add(model)
        await self.session.flush()

        return self._to_entity(model)

    async def get_by_id(self, transaction_id: UUID) -> Optional[Transaction]:
        """
        Retrieve transaction by ID.

        Args:
            transaction_id: Transaction unique identifier

        Returns:
            Transaction entity if found, None otherwise
        """
        stmt = (
            select(TransactionModel)
            .where(TransactionModel.id == transaction_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        return self._to_entity(model) if model else None

    async def list_for_user(self, user_id: UUID, limit: int = 50) -> list[Transaction]:
        """List a user's sent and received transactions, newest first."""
        stmt = (
            select(TransactionModel)
            .where(
                or_(
                    TransactionModel.sender_id == user_id,
                    TransactionModel.receiver_id == user_id,
                )
            )
            .order_by(TransactionModel.created_at.desc())
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)

        return [self._to_entity(model) for model in result.scalars()]

    async def list_pending_withdrawals(self) -> list[Transaction]:
        """List pending withdrawals, newest first."""
        stmt = (
            select(TransactionModel)
            .where(
                TransactionModel.transaction_type == TransactionType.WITHDRAWAL.value,
                TransactionModel.status == TransactionStatus.PENDING.value,
            )
            .order_by(TransactionModel.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)

        return [self._to_entity(model) for model in result.scalars()]

    async def sum_pending_withdrawals(
        self,
        sender_id: UUID,
        in_flight_only: bool = False,
        exclude_id: Optional[UUID] = None,
    ) -> int:
        """Sum a sender's pending withdrawals in one aggregate query."""
        stmt = pending_withdrawal_total(sender_id, in_flight_only, exclude_id)
        result = await self.session.execute(stmt)

        return int(result.scalar_one())

    async def list_stale_withdrawals(self, cutoff: datetime) -> list[Transaction]:
        """List pending withdrawals untouched since cutoff, oldest first."""
        last_touched = func.coalesce(
            TransactionModel.processing_started_at, TransactionModel.created_at
        )
        stmt = (
            select(TransactionModel)
            .where(
                TransactionModel.transaction_type == TransactionType.WITHDRAWAL.value,
                TransactionModel.status == TransactionStatus.PENDING.value,
                last_touched <= cutoff,
            )
            .order_by(last_touched)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)

        return [self._to_entity(model) for model in result.scalars()]

    async def list_completed(self) -> list[Transaction]:
        """List every completed transaction."""
        stmt = (
            select(TransactionModel)
            .where(TransactionModel.status == TransactionStatus.COMPLETED.value)
            .order_by(TransactionModel.created_at)
        )
        result = await self.session.execute(stmt)

        return [self._to_entity(model) for model in result.scalars()]

    async def save_claim(self, transaction: Transaction) -> bool:
        """
        Claim a pending withdrawal for payment.

        Args:
            transaction: Withdrawal with processing_started_at set

        Returns:
            True if the stored row was pending and unclaimed
        """
        stmt = (
            update(TransactionModel)
            .where(
                TransactionModel.id == transaction.id,
                TransactionModel.status == TransactionStatus.PENDING.value,
                TransactionModel.processing_started_at.is_(None),
            )
            .values(processing_started_at=transaction.processing_started_at)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        return result.rowcount == 1

    async def save_resolution(self, transaction: Transaction, claimed: bool) -> bool:
        """
        Persist COMPLETED or DENIED if the stored row is still pending.

        Args:
            transaction: Withdrawal already transitioned in memory
            claimed: Require the stored row to be claimed (True) or
                unclaimed (False)

        Returns:
            True if the transition was applied
        """
        claim_condition = (
            TransactionModel.processing_started_at.is_not(None)
            if claimed
            else TransactionModel.processing_started_at.is_(None)
        )
        stmt = (
            update(TransactionModel)
            .where(
                TransactionModel.id == transaction.id,
                TransactionModel.status == TransactionStatus.PENDING.value,
                claim_condition,
            )
            .values(
                status=transaction.status.value,
                external_transaction_id=transaction.external_transaction_id,
                admin_id=transaction.admin_id,
                resolved_at=transaction.resolved_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        return result.rowcount == 1

    def _to_entity(self, model: TransactionModel) -> Transaction:
        """
        Convert database model to domain entity.

        Args:
            model: SQLAlchemy model

        Returns:
            Transaction domain entity
        """
        return Transaction(
            id=model.id,
            transaction_type=TransactionType(model.transaction_type),
            amount=model.amount,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            status=TransactionStatus(model.status),
            destination_address=model.destination_address,
            external_transaction_id=model.external_transaction_id,
            admin_id=model.admin_id,
            message=model.message,
            processing_started_at=model.processing_started_at,
            resolved_at=model.resolved_at,
            created_at=model.created_at,
        )
