"""
Lightning node bridge client implementation.

HTTP client for the node bridge that executes Lightning and on-chain
payouts. Hardened with a circuit breaker and Prometheus metrics.
"""

import asyncio
import time
from typing import Any, Optional

import aiohttp

from satstream.domain.exceptions import (
    PaymentExecutorError,
    PaymentExecutorUnavailableError,
)
from satstream.domain.services.i_payment_executor import (
    IPaymentExecutor,
    PaymentResult,
)
from satstream.domain.value_objects.destination_address import DestinationAddress
from satstream.infrastructure.monitoring import get_logger, metrics
from satstream.infrastructure.payments.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerError,
)

logger = get_logger(__name__)


class LightningNodeClient(IPaymentExecutor):
    """
    Payment executor backed by a Lightning node bridge.

    Payment calls are never retried: a retry after an unknown outcome
    could pay twice. Only the read-only balance query retries.

    Error mapping:
    - connection refused / circuit open -> PaymentExecutorUnavailableError
      (the node never saw the request)
    - 4xx or success=false body -> PaymentResult(success=False)
    - 5xx, dropped connection, timeout -> PaymentExecutorError
      (outcome unknown)
    """

    def __init__(
        self,
        node_url: str,
        network: str = "testnet",
        api_key: Optional[str] = None,
        total_timeout: float = 30.0,
        connect_timeout: float = 10.0,
        balance_retries: int = 3,
        circuit_breaker: Optional[CircuitBreaker] = None,
    ):
        """
        Initialize node bridge client.

        Args:
            node_url: Node bridge API base URL
            network: mainnet or testnet
            api_key: Optional bearer key for the bridge
            total_timeout: Total request timeout (default: 30s)
            connect_timeout: Connection timeout (default: 10s)
            balance_retries: Attempts for the balance query
            circuit_breaker: Optional circuit breaker override
        """
        self.node_url = node_url.rstrip("/")
        self.network = network
        self.api_key = api_key
        self.balance_retries = balance_retries
        self.timeout = aiohttp.ClientTimeout(
            total=total_timeout,
            connect=connect_timeout,
        )
        self._session: Optional[aiohttp.ClientSession] = None

        self.circuit_breaker = circuit_breaker or CircuitBreaker(
            "lightning_node",
            failure_threshold=5,
            recovery_timeout=60.0,
            expected_exception=PaymentExecutorError,
        )

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None or self._session.closed:
            headers = {"Content-Type": "application/json"}
            if self.api_key:
                headers["Authorization"] = f"Bearer {self.api_key}"
            self._session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers=headers,
                connector=aiohttp.TCPConnector(limit=20, ttl_dns_cache=300),
            )
        return self._session

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    # ================================================================
    # IPaymentExecutor
    # ================================================================

    def validate_address(self, address: str) -> bool:
        """Check Lightning invoice or on-chain address format."""
        return DestinationAddress(address).is_valid()

    async def send_payment(self, invoice: str) -> PaymentResult:
        """
        Pay a Lightning invoice.

        Args:
            invoice: BOLT11 invoice

        Returns:
            Payment outcome

        Raises:
            PaymentExecutorUnavailableError: Node not reached
            PaymentExecutorError: Outcome unknown
        """
        return await self._execute_payment(
            operation="send_payment",
            endpoint="/v1/payments/lightning",
            payload={"invoice": invoice.strip(), "network": self.network},
        )

    async def send_onchain(self, address: str, amount_sats: int) -> PaymentResult:
        """
        Send sats to an on-chain address.

        Args:
            address: Bitcoin address
            amount_sats: Amount in satoshis

        Returns:
            Payment outcome

        Raises:
            PaymentExecutorUnavailableError: Node not reached
            PaymentExecutorError: Outcome unknown
        """
        return await self._execute_payment(
            operation="send_onchain",
            endpoint="/v1/payments/onchain",
            payload={
                "address": address.strip(),
                "amountSats": amount_sats,
                "network": self.network,
            },
        )

    async def get_balance(self) -> int:
        """
        Query node-custodied balance in sats.

        Raises:
            PaymentExecutorError: If the node cannot be queried
        """
        delay = 0.5
        for attempt in range(1, self.balance_retries + 1):
            try:
                data = await self.circuit_breaker.call(
                    self._request_once, "GET", "/v1/balance", None, "get_balance"
                )
                metrics.payment_requests_total.labels(
                    operation="get_balance", status="success"
                ).inc()
                return int(data["balanceSats"])
            except CircuitBreakerError as e:
                metrics.payment_requests_total.labels(
                    operation="get_balance", status="circuit_open"
                ).inc()
                raise PaymentExecutorUnavailableError(str(e)) from e
            except PaymentExecutorError:
                metrics.payment_requests_total.labels(
                    operation="get_balance", status="error"
                ).inc()
                if attempt == self.balance_retries:
                    raise
                logger.warning(
                    f"Node balance query failed "
                    f"(attempt {attempt}/{self.balance_retries}), retrying"
                )
                await asyncio.sleep(delay)
                delay *= 2

        raise PaymentExecutorError("Node balance query failed")

    # ================================================================
    # HTTP plumbing
    # ================================================================

    async def _execute_payment(
        self, operation: str, endpoint: str, payload: dict
    ) -> PaymentResult:
        start = time.time()
        try:
            data = await self.circuit_breaker.call(
                self._request_once, "POST", endpoint, payload, operation
            )
        except CircuitBreakerError as e:
            metrics.payment_requests_total.labels(
                operation=operation, status="circuit_open"
            ).inc()
            raise PaymentExecutorUnavailableError(str(e)) from e
        except PaymentExecutorError:
            metrics.payment_requests_total.labels(
                operation=operation, status="error"
            ).inc()
            raise
        except _Rejected as rejected:
            metrics.payment_requests_total.labels(
                operation=operation, status="rejected"
            ).inc()
            return PaymentResult.failed(rejected.reason)
        finally:
            metrics.payment_request_duration_seconds.labels(
                operation=operation
            ).observe(time.time() - start)

        result = PaymentResult(
            success=bool(data.get("success")),
            external_transaction_id=data.get("transactionId"),
            error=data.get("error"),
        )
        status = "success" if result.success else "rejected"
        metrics.payment_requests_total.labels(operation=operation, status=status).inc()

        if result.success and not result.external_transaction_id:
            logger.warning(f"{operation} succeeded without a transaction id")
        if not result.success and not result.error:
            result = PaymentResult.failed("Payment rejected by node")

        return result

    async def _request_once(
        self,
        method: str,
        endpoint: str,
        payload: Optional[dict],
        operation: str,
    ) -> dict[str, Any]:
        """
        Single HTTP request attempt.

        Returns:
            Decoded JSON body of a 200 response

        Raises:
            _Rejected: Node answered 4xx (nothing was paid)
            PaymentExecutorUnavailableError: Connection could not be opened
            PaymentExecutorError: Any failure after the request was sent
        """
        session = await self._get_session()
        url = f"{self.node_url}{endpoint}"

        try:
            async with session.request(method, url, json=payload) as response:
                if response.status != 200:
                    error_text = await response.text()
                    if 400 <= response.status < 500:
                        raise _Rejected(error_text or f"HTTP {response.status}")
                    raise PaymentExecutorError(
                        f"{operation} failed with {response.status}: {error_text}",
                        status_code=response.status,
                    )
                return await response.json()

        except aiohttp.ClientConnectorError as e:
            raise PaymentExecutorUnavailableError(
                f"Cannot reach Lightning node for {operation}: {e}"
            ) from e
        except aiohttp.ClientError as e:
            raise PaymentExecutorError(f"{operation} interrupted: {e}") from e
        except asyncio.TimeoutError as e:
            raise PaymentExecutorError(f"{operation} timed out") from e


class _Rejected(Exception):
    """Node refused the request; not a circuit breaker failure."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
