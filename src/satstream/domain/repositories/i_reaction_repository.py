"""
Reaction repository interface.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from satstream.domain.entities.reaction import Reaction


class IReactionRepository(ABC):
    """Interface for reaction persistence."""

    @abstractmethod
    async def create(self, reaction: Reaction) -> Reaction:
        """Persist a new reaction."""

    @abstractmethod
    async def list_for_post(self, post_id: UUID) -> list[Reaction]:
        """List reactions on a post, oldest first."""
