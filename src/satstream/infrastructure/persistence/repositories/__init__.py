"""Repository implementations."""

from satstream.infrastructure.persistence.repositories.post_repository import (
    PostRepository,
)
from satstream.infrastructure.persistence.repositories.reaction_repository import (
    ReactionRepository,
)
from satstream.infrastructure.persistence.repositories.transaction_repository import (  # noqa: E501
    TransactionRepository,
)
from satstream.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "PostRepository",
    "ReactionRepository",
    "TransactionRepository",
    "UserRepository",
]
