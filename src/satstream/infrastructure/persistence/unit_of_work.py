"""
Unit of work over one database session.
"""

from typing import Optional

from satstream.domain.exceptions import LedgerInvariantError
from satstream.domain.repositories.i_ledger_store import ILedgerUnitOfWork
from satstream.infrastructure.persistence.database import Database
from satstream.infrastructure.persistence.ledger_store import LedgerStore
from satstream.infrastructure.persistence.repositories import (
    PostRepository,
    ReactionRepository,
    TransactionRepository,
    UserRepository,
)


class SqlAlchemyUnitOfWork(ILedgerUnitOfWork):
    """
    Atomic scope sharing one session between the ledger and repositories.

    Usage:
        async with SqlAlchemyUnitOfWork(database) as uow:
            await uow.ledger.debit(user_id, 100)
            await uow.ledger.record_transaction(...)

    On clean exit the ledger journal is verified and the session
    committed. Any exception, including an unbalanced journal, rolls
    everything back.
    """

    def __init__(self, database: Database):
        self.database = database
        self._session_context = None
        self.session = None

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        self._session_context = self.database.session()
        self.session = await self._session_context.__aenter__()

        self.users = UserRepository(self.session)
        self.transactions = TransactionRepository(self.session)
        self.posts = PostRepository(self.session)
        self.reactions = ReactionRepository(self.session)
        self.ledger = LedgerStore(self.session, self.transactions)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> Optional[bool]:
        context, self._session_context = self._session_context, None

        if exc is None:
            try:
                self.ledger.verify_balanced()
            except LedgerInvariantError as error:
                await context.__aexit__(type(error), error, error.__traceback__)
                raise

        return await context.__aexit__(exc_type, exc, tb)
