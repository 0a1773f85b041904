"""
Unit tests for DIContainer lifecycle.

Usage:
    pytest tests/unit/di/test_container.py
"""

from unittest.mock import MagicMock

from satstream.di.container import DIContainer
from satstream.infrastructure.persistence import Database


def _database(is_sqlite: bool) -> MagicMock:
    database = MagicMock(spec=Database)
    database.is_sqlite = is_sqlite
    return database


class TestDIContainerLifecycle:
    """Startup and shutdown of infrastructure services."""

    async def test_postgres_startup_creates_schema(self):
        database = _database(is_sqlite=False)
        container = DIContainer()
        container.override(database=database)

        await container.initialize()

        database.connect.assert_awaited_once()
        database.create_schema.assert_awaited_once()

    async def test_sqlite_startup_creates_schema(self):
        database = _database(is_sqlite=True)
        container = DIContainer()
        container.override(database=database)

        await container.initialize()

        database.create_schema.assert_awaited_once()

    async def test_shutdown_disconnects_database(self):
        database = _database(is_sqlite=False)
        container = DIContainer()
        container.override(database=database)

        await container.initialize()
        await container.shutdown()

        database.disconnect.assert_awaited_once()
