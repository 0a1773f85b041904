"""
Ledger store and unit of work interfaces.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional
from uuid import UUID

from satstream.domain.entities.transaction import Transaction
from satstream.domain.repositories.i_post_repository import IPostRepository
from satstream.domain.repositories.i_reaction_repository import (
    IReactionRepository,
)
from satstream.domain.repositories.i_transaction_repository import (
    ITransactionRepository,
)
from satstream.domain.repositories.i_user_repository import IUserRepository


class ILedgerStore(ABC):
    """
    Single mutation point for user balances.

    Every credit or debit made through a store must be backed by a
    transaction recorded or settled through the same store before the
    enclosing unit of work commits.
    """

    @abstractmethod
    async def get_balance(self, user_id: UUID) -> int:
        """
        Read the current stored balance.

        Raises:
            EntityNotFoundError: If user does not exist
        """

    @abstractmethod
    async def get_available_balance(
        self, user_id: UUID, exclude_id: Optional[UUID] = None
    ) -> int:
        """
        Balance minus withdrawals whose payment is in flight.

        This is what tips and new withdrawal requests may spend.

        Raises:
            EntityNotFoundError: If user does not exist
        """

    @abstractmethod
    async def credit(self, user_id: UUID, amount: int) -> int:
        """
        Add sats to a balance.

        Returns:
            New balance

        Raises:
            EntityNotFoundError: If user does not exist
        """

    @abstractmethod
    async def debit(self, user_id: UUID, amount: int) -> int:
        """
        Remove sats from a balance, never below in-flight withdrawals.

        Returns:
            New balance

        Raises:
            InsufficientFundsError: If amount exceeds the available balance
            EntityNotFoundError: If user does not exist
        """

    @abstractmethod
    async def record_transaction(self, transaction: Transaction) -> Transaction:
        """
        Persist a new transaction.

        TIP and REWARD must be completed, WITHDRAWAL must be pending.
        """

    @abstractmethod
    async def settle_withdrawal(
        self, transaction: Transaction, claimed: bool = True
    ) -> bool:
        """
        Persist a withdrawal's terminal state.

        A COMPLETED withdrawal obliges the same unit of work to debit
        the sender by its amount.

        Returns:
            True if the transition was applied
        """

    @abstractmethod
    def verify_balanced(self) -> None:
        """
        Check balance changes against recorded transactions.

        Raises:
            LedgerInvariantError: If any user's net change is unbacked
        """


class ILedgerUnitOfWork(ABC):
    """
    Atomic scope over the ledger and its repositories.

    Commits on clean exit after verify_balanced(), rolls back otherwise.
    """

    users: IUserRepository
    transactions: ITransactionRepository
    posts: IPostRepository
    reactions: IReactionRepository
    ledger: ILedgerStore

    @abstractmethod
    async def __aenter__(self) -> "ILedgerUnitOfWork":
        """Open the scope."""

    @abstractmethod
    async def __aexit__(self, exc_type, exc, tb) -> Optional[bool]:
        """Commit or roll back."""


UnitOfWorkFactory = Callable[[], ILedgerUnitOfWork]
