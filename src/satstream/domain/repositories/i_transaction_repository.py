"""
Transaction repository interface.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from satstream.domain.entities.transaction import Transaction


class ITransactionRepository(ABC):
    """
    Interface for transaction persistence.

    State transitions are conditional writes: they only apply while the
    stored row is still pending, which makes approve/deny at-most-once
    across concurrent callers.
    """

    @abstractmethod
    async def create(self, transaction: Transaction) -> Transaction:
        """
        Persist a new transaction.

        Args:
            transaction: Transaction entity to persist

        Returns:
            Created transaction
        """

    @abstractmethod
    async def get_by_id(self, transaction_id: UUID) -> Optional[Transaction]:
        """
        Retrieve transaction by ID.

        Args:
            transaction_id: Transaction unique identifier

        Returns:
            Transaction if found, None otherwise
        """

    @abstractmethod
    async def list_for_user(self, user_id: UUID, limit: int = 50) -> list[Transaction]:
        """
        List transactions where user is sender or receiver, newest first.

        Args:
            user_id: User identifier
            limit: Maximum number of rows

        Returns:
            Transactions ordered by created_at descending
        """

    @abstractmethod
    async def list_pending_withdrawals(self) -> list[Transaction]:
        """List pending withdrawals, newest first."""

    @abstractmethod
    async def sum_pending_withdrawals(
        self,
        sender_id: UUID,
        in_flight_only: bool = False,
        exclude_id: Optional[UUID] = None,
    ) -> int:
        """
        Total sats of a sender's pending withdrawals.

        Args:
            sender_id: Requesting user
            in_flight_only: Count only withdrawals with a payment attempt
            exclude_id: Withdrawal to leave out of the total

        Returns:
            Sum of amounts (0 if none)
        """

    @abstractmethod
    async def list_stale_withdrawals(self, cutoff: datetime) -> list[Transaction]:
        """
        List pending withdrawals not touched since cutoff.

        A withdrawal's age is measured from its claim time when a payment
        attempt started, else from its creation time. Oldest first.
        """

    @abstractmethod
    async def list_completed(self) -> list[Transaction]:
        """List every completed transaction (for balance audits)."""

    @abstractmethod
    async def save_claim(self, transaction: Transaction) -> bool:
        """
        Persist processing_started_at if the row is pending and unclaimed.

        Returns:
            True if this caller won the claim
        """

    @abstractmethod
    async def save_resolution(self, transaction: Transaction, claimed: bool) -> bool:
        """
        Persist a terminal status if the row is still pending.

        Args:
            transaction: Transaction already moved to COMPLETED or DENIED
            claimed: Whether the stored row must be claimed (True) or
                unclaimed (False) for the write to apply

        Returns:
            True if the transition was applied
        """
