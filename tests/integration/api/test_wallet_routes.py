"""
Integration tests for health, wallet and post routes.

Drives the FastAPI app through httpx.AsyncClient against a SQLite
database and a fake payment executor.

Usage:
    pytest tests/integration/api/test_wallet_routes.py
"""

from uuid import uuid4

from satstream.application.use_cases import CreatePost
from satstream.domain.value_objects.actor import Actor
from tests.helpers import balance_of


class TestHealthRoutes:
    """Service probes."""

    async def test_health(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["database"] == "healthy"
        assert data["components"]["relay"]["clients"] == 0

    async def test_request_id_echoed(self, client):
        response = await client.get("/", headers={"X-Request-ID": "req-123"})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "req-123"

    async def test_metrics_exposed(self, client):
        await client.get("/api/health")

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert "satstream_http_requests_total" in response.text


class TestWalletRoutes:
    """Integration tests for Wallet API routes."""

    # ================================================================
    # Authentication
    # ================================================================

    async def test_missing_token(self, client):
        response = await client.get("/api/wallet")

        assert response.status_code == 401
        assert response.json()["error"] == "AUTHENTICATION_ERROR"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_garbage_token(self, client):
        response = await client.get(
            "/api/wallet", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401

    async def test_banned_user_rejected(
        self, client, container, make_user, auth_headers
    ):
        user = await make_user("mallory", balance=100)
        async with container.uow_factory() as uow:
            await uow.users.set_banned(user.id, True)

        response = await client.get("/api/wallet", headers=auth_headers(user))

        assert response.status_code == 403
        assert response.json()["error"] == "USER_BANNED"

    # ================================================================
    # Tips
    # ================================================================

    async def test_tip_and_summary(
        self, client, make_user, auth_headers, uow_factory, publisher
    ):
        alice = await make_user("alice", balance=1000)
        bob = await make_user("bob")

        response = await client.post(
            "/api/wallet/tip",
            json={"receiver_id": str(bob.id), "amount": 250, "message": "nice"},
            headers=auth_headers(alice),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["type"] == "tip"
        assert data["status"] == "completed"
        assert data["amount"] == 250

        summary = (await client.get("/api/wallet", headers=auth_headers(alice))).json()
        assert summary["balance"] == 750
        assert summary["node_balance"] is None
        assert await balance_of(uow_factory, bob.id) == 250
        assert publisher.events[0]["to_username"] == "bob"

    async def test_tip_insufficient_funds(self, client, make_user, auth_headers):
        alice = await make_user("alice", balance=10)
        bob = await make_user("bob")

        response = await client.post(
            "/api/wallet/tip",
            json={"receiver_id": str(bob.id), "amount": 11},
            headers=auth_headers(alice),
        )

        assert response.status_code == 402
        assert response.json()["error"] == "INSUFFICIENT_FUNDS"

    async def test_tip_errors(self, client, make_user, auth_headers):
        alice = await make_user("alice", balance=10)
        headers = auth_headers(alice)

        self_tip = await client.post(
            "/api/wallet/tip",
            json={"receiver_id": str(alice.id), "amount": 1},
            headers=headers,
        )
        missing = await client.post(
            "/api/wallet/tip",
            json={"receiver_id": str(uuid4()), "amount": 1},
            headers=headers,
        )
        zero = await client.post(
            "/api/wallet/tip",
            json={"receiver_id": str(uuid4()), "amount": 0},
            headers=headers,
        )
        stringly = await client.post(
            "/api/wallet/tip",
            json={"receiver_id": str(uuid4()), "amount": "5"},
            headers=headers,
        )

        assert self_tip.status_code == 422
        assert self_tip.json()["error"] == "SELF_TIP"
        assert missing.status_code == 404
        assert missing.json()["error"] == "RECIPIENT_NOT_FOUND"
        assert zero.status_code == 422
        assert zero.json()["error"] == "VALIDATION_ERROR"
        assert stringly.status_code == 422

    async def test_history(self, client, make_user, auth_headers):
        alice = await make_user("alice", balance=1000)
        bob = await make_user("bob")
        await client.post(
            "/api/wallet/tip",
            json={"receiver_id": str(bob.id), "amount": 100},
            headers=auth_headers(alice),
        )

        response = await client.get(
            "/api/wallet/transactions", headers=auth_headers(bob)
        )
        too_many = await client.get(
            "/api/wallet/transactions?limit=500", headers=auth_headers(bob)
        )
        snooping = await client.get(
            f"/api/wallet/transactions?user_id={alice.id}", headers=auth_headers(bob)
        )

        assert response.status_code == 200
        items = response.json()
        assert len(items) == 1
        assert items[0]["sender"]["username"] == "alice"
        assert items[0]["sender"].get("email") is None
        assert too_many.status_code == 422
        assert snooping.status_code == 403

    # ================================================================
    # Withdrawals
    # ================================================================

    async def test_request_withdrawal(self, client, make_user, auth_headers):
        alice = await make_user("alice", balance=1000)

        response = await client.post(
            "/api/wallet/withdrawals",
            json={"destination_address": "lnbc2500u1pjtestinvoice", "amount": 600},
            headers=auth_headers(alice),
        )
        summary = (await client.get("/api/wallet", headers=auth_headers(alice))).json()

        assert response.status_code == 201
        assert response.json()["status"] == "pending"
        assert summary["balance"] == 1000
        assert summary["pending_withdrawal_total"] == 600

    async def test_request_withdrawal_bad_destination(
        self, client, make_user, auth_headers
    ):
        alice = await make_user("alice", balance=1000)

        response = await client.post(
            "/api/wallet/withdrawals",
            json={"destination_address": "paypal:alice", "amount": 600},
            headers=auth_headers(alice),
        )

        assert response.status_code == 422
        assert response.json()["error"] == "INVALID_DESTINATION"


class TestPostRoutes:
    """Integration tests for post reactions."""

    async def test_tip_reaction(self, client, make_user, auth_headers, uow_factory):
        author = await make_user("author")
        fan = await make_user("fan", balance=500)
        post = await CreatePost(uow_factory).execute(Actor.from_user(author), "gm")

        response = await client.post(
            f"/api/posts/{post.id}/react",
            json={"reaction_type": "tip", "amount": 120},
            headers=auth_headers(fan),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["reaction_type"] == "tip"
        assert data["transaction_id"] is not None
        assert await balance_of(uow_factory, author.id) == 120

    async def test_react_to_missing_post(self, client, make_user, auth_headers):
        fan = await make_user("fan", balance=500)

        response = await client.post(
            f"/api/posts/{uuid4()}/react",
            json={"reaction_type": "like"},
            headers=auth_headers(fan),
        )

        assert response.status_code == 404
