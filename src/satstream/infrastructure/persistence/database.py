"""
Database connection and session management.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from satstream.infrastructure.monitoring import get_logger
from satstream.infrastructure.persistence.models import Base

logger = get_logger(__name__)

# Seconds a SQLite writer waits on another writer's lock
SQLITE_BUSY_TIMEOUT = 30


class Database:
    """
    Async engine and session factory.

    PostgreSQL (asyncpg) in deployments with a bounded connection pool;
    SQLite (aiosqlite) for local runs and tests. Both get their schema
    from the models through create_schema().
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 20,
        max_overflow: int = 10,
        pool_recycle: int = 3600,
    ):
        """
        Initialize database connection settings.

        Args:
            database_url: SQLAlchemy async connection string
            echo: Log every SQL statement
            pool_size: Pooled PostgreSQL connections
            max_overflow: Extra connections beyond pool_size
            pool_recycle: Recycle connections after N seconds
        """
        self.database_url = database_url
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_recycle = pool_recycle
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker | None = None

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.database_url).get_backend_name() == "sqlite"

    def _engine_options(self) -> dict[str, Any]:
        if self.is_sqlite:
            return {"connect_args": {"timeout": SQLITE_BUSY_TIMEOUT}}
        return {
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": True,
            "connect_args": {"server_settings": {"application_name": "satstream"}},
        }

    async def connect(self) -> None:
        """Create the engine and session factory (idempotent)."""
        if self._engine is not None:
            return

        self._engine = create_async_engine(
            self.database_url, echo=self.echo, **self._engine_options()
        )
        if self.is_sqlite:
            event.listen(
                self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys
            )

        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info(f"Database engine ready ({self._engine.url.get_backend_name()})")

    async def disconnect(self) -> None:
        if self._engine is None:
            return

        await self._engine.dispose()
        self._engine = None
        self._session_factory = None

    def _require_engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self._engine

    async def create_schema(self) -> None:
        """Create all tables that do not exist yet."""
        async with self._require_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Session scoped to one transaction.

        Commits when the block exits cleanly and rolls back on any
        exception.

        Usage:
            async with database.session() as session:
                result = await session.execute(query)
        """
        self._require_engine()

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def health_check(self) -> bool:
        """Return True if a trivial query succeeds."""
        if self._engine is None:
            return False

        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Database health check failed: {e}")
            return False
        return True


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
