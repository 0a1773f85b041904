"""
Test fixtures and configuration.

Every test that touches persistence gets its own file-backed SQLite
database under pytest's tmp_path.
"""

from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio

from satstream.application.use_cases import CreateUser, GrantReward
from satstream.config.settings import Settings, override_settings, reset_settings
from satstream.domain.entities.user import User
from satstream.infrastructure.persistence import (
    Database,
    SqlAlchemyUnitOfWork,
    UserLockRegistry,
)
from tests.helpers import FakePaymentExecutor, RecordingPublisher

TEST_JWT_SECRET = "test-secret-key-not-for-production"


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'satstream_test.db'}"


@pytest.fixture
def test_settings(database_url: str):
    """Install test settings as the global singleton."""
    settings = Settings(
        ENV="test",
        DATABASE_URL=database_url,
        JWT_SECRET_KEY=TEST_JWT_SECRET,
        LOG_LEVEL="WARNING",
        METRICS_ENABLED=True,
        PAYMENT_TIMEOUT_SECONDS=2.0,
        WITHDRAWAL_STALE_AFTER_MINUTES=30,
    )
    override_settings(settings)
    yield settings
    reset_settings()


@pytest_asyncio.fixture
async def database(database_url: str) -> AsyncGenerator[Database, None]:
    """Connected database with a fresh schema."""
    db = Database(database_url=database_url)
    await db.connect()
    await db.create_schema()

    yield db

    await db.disconnect()


@pytest.fixture
def uow_factory(database: Database) -> Callable[[], SqlAlchemyUnitOfWork]:
    return lambda: SqlAlchemyUnitOfWork(database)


@pytest.fixture
def user_locks() -> UserLockRegistry:
    return UserLockRegistry()


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def executor() -> FakePaymentExecutor:
    return FakePaymentExecutor()


@pytest.fixture
def make_user(uow_factory, user_locks) -> Callable[..., Awaitable[User]]:
    """
    Create a user and fund it through a reward transaction.

    Usage:
        alice = await make_user("alice", balance=1000)
    """

    async def _make_user(
        username: str, balance: int = 0, is_admin: bool = False
    ) -> User:
        user = await CreateUser(uow_factory).execute(
            username=username,
            email=f"{username}@example.com",
            is_admin=is_admin,
        )
        if balance:
            await GrantReward(uow_factory, user_locks).execute(
                receiver_id=user.id, amount=balance, message="test funding"
            )
            user.balance = balance
        return user

    return _make_user

