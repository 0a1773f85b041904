"""
Domain entities.
"""

from satstream.domain.entities.post import Post
from satstream.domain.entities.reaction import Reaction, ReactionType
from satstream.domain.entities.transaction import (
    Transaction,
    TransactionStatus,
    TransactionType,
)
from satstream.domain.entities.user import User

__all__ = [
    "Post",
    "Reaction",
    "ReactionType",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "User",
]
