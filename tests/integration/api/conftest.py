"""
API test fixtures.

ASGITransport does not run the lifespan, so the container is wired to
the per-test database and test doubles by hand.
"""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from satstream.di.container import DIContainer, get_container, reset_container
from satstream.domain.entities.user import User
from satstream.infrastructure.auth.jwt_handler import create_access_token
from satstream.main import create_app


@pytest.fixture
def container(test_settings, database, executor, publisher) -> DIContainer:
    reset_container()
    container = get_container()
    container.override(
        payment_executor=executor,
        event_publisher=publisher,
        database=database,
    )
    yield container
    reset_container()


@pytest_asyncio.fixture
async def client(container, test_settings) -> AsyncGenerator[httpx.AsyncClient, None]:
    app = create_app(test_settings)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as client:
        yield client


@pytest.fixture
def auth_headers(test_settings):
    """
    Bearer headers for a stored user.

    Usage:
        response = await client.get("/api/wallet", headers=auth_headers(alice))
    """

    def _auth_headers(user: User) -> dict[str, str]:
        token = create_access_token(user.id, user.username)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
