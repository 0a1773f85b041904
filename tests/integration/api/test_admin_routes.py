"""
Integration tests for Admin API routes.

Withdrawal review, reconciliation, moderation and audit through the
HTTP surface.

Usage:
    pytest tests/integration/api/test_admin_routes.py
"""

import pytest_asyncio

from satstream.domain.exceptions import PaymentExecutorError
from satstream.domain.services.i_payment_executor import PaymentResult
from tests.helpers import balance_of

INVOICE = "lntb5u1pjadminroutetest"


@pytest_asyncio.fixture
async def parties(make_user):
    admin = await make_user("admin", is_admin=True)
    alice = await make_user("alice", balance=1000)
    return admin, alice


async def _request(client, auth_headers, user, amount=400):
    response = await client.post(
        "/api/wallet/withdrawals",
        json={"destination_address": INVOICE, "amount": amount},
        headers=auth_headers(user),
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestAdminWithdrawalRoutes:
    """Integration tests for withdrawal review endpoints."""

    # ================================================================
    # Review queue
    # ================================================================

    async def test_pending_list_requires_admin(self, client, parties, auth_headers):
        _, alice = parties

        response = await client.get(
            "/api/admin/withdrawals", headers=auth_headers(alice)
        )

        assert response.status_code == 403
        assert response.json()["error"] == "ADMIN_REQUIRED"

    async def test_pending_list(self, client, parties, auth_headers):
        admin, alice = parties
        withdrawal_id = await _request(client, auth_headers, alice)

        response = await client.get(
            "/api/admin/withdrawals", headers=auth_headers(admin)
        )

        assert response.status_code == 200
        items = response.json()
        assert [item["id"] for item in items] == [withdrawal_id]
        assert items[0]["requester"]["username"] == "alice"
        assert items[0]["requester"]["email"] == "alice@example.com"
        assert items[0]["in_flight"] is False

    # ================================================================
    # Approve / deny
    # ================================================================

    async def test_approve_then_repeat(
        self, client, parties, auth_headers, uow_factory, executor
    ):
        admin, alice = parties
        withdrawal_id = await _request(client, auth_headers, alice)
        url = f"/api/admin/withdrawals/{withdrawal_id}/approve"

        first = await client.post(url, headers=auth_headers(admin))
        second = await client.post(url, headers=auth_headers(admin))

        assert first.status_code == 200
        assert first.json()["status"] == "completed"
        assert first.json()["external_transaction_id"] == "ext-1"
        assert second.status_code == 409
        assert second.json()["error"] == "ALREADY_PROCESSED"
        assert len(executor.calls) == 1
        assert await balance_of(uow_factory, alice.id) == 600

    async def test_approve_rejected_payment(
        self, client, parties, auth_headers, uow_factory, executor
    ):
        admin, alice = parties
        executor.result = PaymentResult.failed("invoice expired")
        withdrawal_id = await _request(client, auth_headers, alice)

        response = await client.post(
            f"/api/admin/withdrawals/{withdrawal_id}/approve",
            headers=auth_headers(admin),
        )

        assert response.status_code == 502
        data = response.json()
        assert data["error"] == "PAYMENT_FAILED"
        assert data["transaction_id"] == withdrawal_id
        assert data["requires_reconciliation"] is False
        assert await balance_of(uow_factory, alice.id) == 1000

    async def test_unknown_outcome_goes_to_reconciliation(
        self, client, parties, auth_headers, uow_factory, executor
    ):
        admin, alice = parties
        executor.error = PaymentExecutorError("node returned 500")
        withdrawal_id = await _request(client, auth_headers, alice)

        response = await client.post(
            f"/api/admin/withdrawals/{withdrawal_id}/approve",
            headers=auth_headers(admin),
        )
        deny = await client.post(
            f"/api/admin/withdrawals/{withdrawal_id}/deny",
            headers=auth_headers(admin),
        )
        pending = await client.get(
            "/api/admin/withdrawals", headers=auth_headers(admin)
        )

        assert response.status_code == 502
        assert response.json()["requires_reconciliation"] is True
        assert deny.status_code == 409
        assert pending.json()[0]["in_flight"] is True

        reconcile = await client.post(
            f"/api/admin/withdrawals/{withdrawal_id}/reconcile",
            json={"outcome": "paid", "external_transaction_id": "ext-manual"},
            headers=auth_headers(admin),
        )

        assert reconcile.status_code == 200
        assert reconcile.json()["status"] == "completed"
        assert reconcile.json()["external_transaction_id"] == "ext-manual"
        assert await balance_of(uow_factory, alice.id) == 600

    async def test_reconcile_bad_outcome(self, client, parties, auth_headers):
        admin, alice = parties
        withdrawal_id = await _request(client, auth_headers, alice)

        response = await client.post(
            f"/api/admin/withdrawals/{withdrawal_id}/reconcile",
            json={"outcome": "maybe"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 422

    async def test_deny(self, client, parties, auth_headers, uow_factory):
        admin, alice = parties
        withdrawal_id = await _request(client, auth_headers, alice)

        response = await client.post(
            f"/api/admin/withdrawals/{withdrawal_id}/deny",
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["status"] == "denied"
        assert await balance_of(uow_factory, alice.id) == 1000

    async def test_unknown_withdrawal(self, client, parties, auth_headers):
        admin, alice = parties
        await client.post(
            "/api/wallet/tip",
            json={"receiver_id": str(admin.id), "amount": 5},
            headers=auth_headers(alice),
        )
        history = await client.get(
            "/api/wallet/transactions", headers=auth_headers(alice)
        )
        tip_id = history.json()[0]["id"]

        response = await client.post(
            f"/api/admin/withdrawals/{tip_id}/deny", headers=auth_headers(admin)
        )

        assert response.status_code == 404
        assert response.json()["error"] == "TRANSACTION_NOT_FOUND"


class TestAdminModerationRoutes:
    """Integration tests for ban and audit endpoints."""

    async def test_ban_blocks_user(self, client, parties, auth_headers):
        admin, alice = parties

        response = await client.post(
            f"/api/admin/users/{alice.id}/ban",
            json={"banned": True},
            headers=auth_headers(admin),
        )
        wallet = await client.get("/api/wallet", headers=auth_headers(alice))

        assert response.status_code == 200
        assert response.json()["is_banned"] is True
        assert wallet.status_code == 403

    async def test_admin_cannot_ban_self(self, client, parties, auth_headers):
        admin, _ = parties

        response = await client.post(
            f"/api/admin/users/{admin.id}/ban", headers=auth_headers(admin), json={}
        )

        assert response.status_code == 422

    async def test_audit(self, client, parties, auth_headers):
        admin, alice = parties
        await client.post(
            "/api/wallet/tip",
            json={"receiver_id": str(admin.id), "amount": 300},
            headers=auth_headers(alice),
        )

        response = await client.get(
            "/api/admin/ledger/audit", headers=auth_headers(admin)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["consistent"] is True
        assert data["users_checked"] == 2
        assert data["total_balance"] == 1000
        assert data["mismatches"] == []

    async def test_admin_sees_node_balance(
        self, client, parties, auth_headers, executor
    ):
        admin, _ = parties
        executor.node_balance = 2_100_000

        response = await client.get("/api/wallet", headers=auth_headers(admin))

        assert response.json()["node_balance"] == 2_100_000
