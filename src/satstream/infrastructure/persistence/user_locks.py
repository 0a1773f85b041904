"""
In-process per-user lock registry.
"""

import asyncio
from contextlib import AsyncExitStack, asynccontextmanager
from typing import AsyncIterator
from uuid import UUID
from weakref import WeakValueDictionary

from satstream.domain.services.i_user_locks import IUserLocks


class UserLockRegistry(IUserLocks):
    """
    One asyncio.Lock per user id, created on demand.

    Entries disappear once no operation holds a reference. Locks only
    serialize work inside one process; cross-process safety comes from
    the compare-and-swap debit and conditional withdrawal updates.
    """

    def __init__(self):
        self._locks: WeakValueDictionary[UUID, asyncio.Lock] = WeakValueDictionary()

    def _lock_for(self, user_id: UUID) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    @asynccontextmanager
    async def hold(self, *user_ids: UUID) -> AsyncIterator[None]:
        """Acquire every given user's lock in sorted id order."""
        ordered = sorted({user_id for user_id in user_ids if user_id is not None})
        locks = [self._lock_for(user_id) for user_id in ordered]

        async with AsyncExitStack() as stack:
            for lock in locks:
                await stack.enter_async_context(lock)
            yield

    def is_locked(self, user_id: UUID) -> bool:
        lock = self._locks.get(user_id)
        return lock is not None and lock.locked()
