"""
Shared lookup for the withdrawal workflow use cases.
"""

from uuid import UUID

from satstream.domain.entities.transaction import Transaction, TransactionType
from satstream.domain.exceptions import (
    TransactionNotFoundError,
    TransactionNotPendingError,
)
from satstream.domain.repositories.i_ledger_store import ILedgerUnitOfWork


async def load_withdrawal(uow: ILedgerUnitOfWork, transaction_id: UUID) -> Transaction:
    """
    Fetch a withdrawal by id.

    Raises:
        TransactionNotFoundError: Missing id or not a withdrawal
    """
    transaction = await uow.transactions.get_by_id(transaction_id)
    if (
        transaction is None
        or transaction.transaction_type != TransactionType.WITHDRAWAL
    ):
        raise TransactionNotFoundError(str(transaction_id))
    return transaction


def ensure_pending(transaction: Transaction) -> None:
    """Raise TransactionNotPendingError for resolved withdrawals."""
    if not transaction.is_pending:
        raise TransactionNotPendingError(
            str(transaction.id), transaction.status.value
        )
