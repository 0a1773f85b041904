"""
Unit tests for LightningNodeClient.

Runs the client against a local aiohttp node bridge stub and checks how
each kind of response maps onto PaymentResult and executor errors.

Usage:
    pytest tests/unit/infrastructure/test_lightning_node_client.py
"""

import asyncio

import pytest
import pytest_asyncio
from aiohttp import test_utils, web

from satstream.domain.exceptions import (
    PaymentExecutorError,
    PaymentExecutorUnavailableError,
)
from satstream.infrastructure.payments import (
    CircuitBreaker,
    CircuitState,
    LightningNodeClient,
)

INVOICE = "lntb10u1pjnodeclienttest"
ONCHAIN = "bc1qar0srrr7xfkvy5l643lydnw9re59gtzzwf5mdq"


class NodeBridgeStub:
    """Scriptable node bridge: set `status`, `body` or `delay` per test."""

    def __init__(self):
        self.status = 200
        self.body = {"success": True, "transactionId": "tx-1"}
        self.delay = 0.0
        self.requests: list[tuple[str, dict]] = []
        self.balance_failures = 0

    async def pay(self, request: web.Request) -> web.Response:
        self.requests.append((request.path, await request.json()))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.status != 200:
            return web.Response(status=self.status, text="node says no")
        return web.json_response(self.body)

    async def balance(self, request: web.Request) -> web.Response:
        self.requests.append((request.path, {}))
        if self.balance_failures:
            self.balance_failures -= 1
            return web.Response(status=503, text="busy")
        return web.json_response({"balanceSats": 1_500_000})

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/v1/payments/lightning", self.pay)
        app.router.add_post("/v1/payments/onchain", self.pay)
        app.router.add_get("/v1/balance", self.balance)
        return app


@pytest.fixture
def bridge():
    return NodeBridgeStub()


@pytest_asyncio.fixture
async def node_url(bridge):
    server = test_utils.TestServer(bridge.app())
    await server.start_server()
    yield str(server.make_url("")).rstrip("/")
    await server.close()


@pytest_asyncio.fixture
async def client(node_url):
    client = LightningNodeClient(
        node_url,
        network="testnet",
        api_key="secret",
        total_timeout=0.5,
        circuit_breaker=CircuitBreaker(
            "test_node",
            failure_threshold=2,
            recovery_timeout=60.0,
            expected_exception=PaymentExecutorError,
        ),
    )
    yield client
    await client.close()


class TestLightningNodeClient:
    """Error mapping of the node bridge client."""

    # ================================================================
    # Payments
    # ================================================================

    async def test_lightning_payment_success(self, client, bridge):
        result = await client.send_payment(f" {INVOICE} ")

        assert result.success
        assert result.external_transaction_id == "tx-1"
        assert bridge.requests == [
            ("/v1/payments/lightning", {"invoice": INVOICE, "network": "testnet"})
        ]

    async def test_onchain_payment_sends_amount(self, client, bridge):
        await client.send_onchain(ONCHAIN, 25_000)

        assert bridge.requests == [
            (
                "/v1/payments/onchain",
                {"address": ONCHAIN, "amountSats": 25_000, "network": "testnet"},
            )
        ]

    async def test_success_false_is_a_rejection(self, client, bridge):
        bridge.body = {"success": False, "error": "no route found"}

        result = await client.send_payment(INVOICE)

        assert not result.success
        assert result.error == "no route found"

    async def test_client_error_is_a_rejection(self, client, bridge):
        bridge.status = 400

        result = await client.send_payment(INVOICE)

        assert not result.success
        assert result.error == "node says no"
        assert client.circuit_breaker.failure_count == 0

    async def test_server_error_is_unknown_outcome(self, client, bridge):
        bridge.status = 500

        with pytest.raises(PaymentExecutorError) as exc_info:
            await client.send_payment(INVOICE)

        assert not isinstance(exc_info.value, PaymentExecutorUnavailableError)
        assert exc_info.value.status_code == 500

    async def test_timeout_is_unknown_outcome(self, client, bridge):
        bridge.delay = 1.0

        with pytest.raises(PaymentExecutorError) as exc_info:
            await client.send_payment(INVOICE)

        assert not isinstance(exc_info.value, PaymentExecutorUnavailableError)

    async def test_payments_are_not_retried(self, client, bridge):
        bridge.status = 503

        with pytest.raises(PaymentExecutorError):
            await client.send_payment(INVOICE)

        assert len(bridge.requests) == 1

    async def test_open_circuit_means_unavailable(self, client, bridge):
        bridge.status = 500
        for _ in range(2):
            with pytest.raises(PaymentExecutorError):
                await client.send_payment(INVOICE)

        assert client.circuit_breaker.state == CircuitState.OPEN
        with pytest.raises(PaymentExecutorUnavailableError):
            await client.send_payment(INVOICE)
        assert len(bridge.requests) == 2

    async def test_unreachable_node_is_unavailable(self):
        client = LightningNodeClient("http://127.0.0.1:9", total_timeout=0.5)
        try:
            with pytest.raises(PaymentExecutorUnavailableError):
                await client.send_payment(INVOICE)
        finally:
            await client.close()

    # ================================================================
    # Balance and validation
    # ================================================================

    async def test_balance_retries_transient_failures(self, client, bridge):
        bridge.balance_failures = 1

        assert await client.get_balance() == 1_500_000
        assert len(bridge.requests) == 2

    def test_validate_address(self):
        client = LightningNodeClient("http://node")

        assert client.validate_address(INVOICE)
        assert client.validate_address(ONCHAIN)
        assert not client.validate_address("not-an-address")
