"""
Per-user mutual exclusion interface.
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager
from uuid import UUID


class IUserLocks(ABC):
    """Serializes ledger operations touching the same user."""

    @abstractmethod
    def hold(self, *user_ids: UUID) -> AsyncContextManager[None]:
        """
        Hold the locks of all given users.

        Locks are taken in a fixed order so multi-user operations cannot
        deadlock each other. None entries are ignored.
        """
