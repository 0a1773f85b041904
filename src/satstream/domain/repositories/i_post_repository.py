"""
Post repository interface.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from satstream.domain.entities.post import Post


class IPostRepository(ABC):
    """Interface for post lookups needed by tip reactions."""

    @abstractmethod
    async def create(self, post: Post) -> Post:
        """Persist a new post."""

    @abstractmethod
    async def get_by_id(self, post_id: UUID) -> Optional[Post]:
        """Get post by ID, None if missing."""
