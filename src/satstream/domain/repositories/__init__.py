"""
Repository interfaces.
"""

from satstream.domain.repositories.i_ledger_store import (
    ILedgerStore,
    ILedgerUnitOfWork,
    UnitOfWorkFactory,
)
from satstream.domain.repositories.i_post_repository import IPostRepository
from satstream.domain.repositories.i_reaction_repository import (
    IReactionRepository,
)
from satstream.domain.repositories.i_transaction_repository import (
    ITransactionRepository,
)
from satstream.domain.repositories.i_user_repository import IUserRepository

__all__ = [
    "ILedgerStore",
    "ILedgerUnitOfWork",
    "IPostRepository",
    "IReactionRepository",
    "ITransactionRepository",
    "IUserRepository",
    "UnitOfWorkFactory",
]
