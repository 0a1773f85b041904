"""
Infrastructure persistence package.
"""

from satstream.infrastructure.persistence.database import Database
from satstream.infrastructure.persistence.ledger_store import LedgerStore
from satstream.infrastructure.persistence.models import (
    Base,
    PostModel,
    ReactionModel,
    TransactionModel,
    UserModel,
)
from satstream.infrastructure.persistence.unit_of_work import (
    SqlAlchemyUnitOfWork,
)
from satstream.infrastructure.persistence.user_locks import UserLockRegistry

__all__ = [
    "Database",
    "LedgerStore",
    "SqlAlchemyUnitOfWork",
    "UserLockRegistry",
    "Base",
    "UserModel",
    "PostModel",
    "TransactionModel",
    "ReactionModel",
]
