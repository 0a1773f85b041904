"""
Unit tests for CircuitBreaker.

Tests circuit breaker state machine.

Usage:
    pytest tests/unit/infrastructure/test_circuit_breaker.py
"""

import asyncio

import pytest

from satstream.infrastructure.payments.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerError,
    CircuitState,
)


class ServiceDown(Exception):
    pass


async def _ok():
    return "ok"


async def _fail():
    raise ServiceDown("down")


class TestCircuitBreaker:
    """Test CircuitBreaker core functionality."""

    def _create_breaker(self, recovery_timeout=60.0):
        return CircuitBreaker(
            "test_service",
            failure_threshold=3,
            recovery_timeout=recovery_timeout,
            expected_exception=ServiceDown,
        )

    async def test_starts_closed(self):
        breaker = self._create_breaker()

        assert breaker.state == CircuitState.CLOSED
        assert breaker.failure_count == 0

    async def test_successful_call_passes_through(self):
        breaker = self._create_breaker()

        assert await breaker.call(_ok) == "ok"
        assert breaker.state == CircuitState.CLOSED

    async def test_opens_after_threshold(self):
        breaker = self._create_breaker()

        for _ in range(3):
            with pytest.raises(ServiceDown):
                await breaker.call(_fail)

        assert breaker.state == CircuitState.OPEN
        with pytest.raises(CircuitBreakerError):
            await breaker.call(_ok)

    async def test_unexpected_exceptions_do_not_count(self):
        breaker = self._create_breaker()

        async def _bug():
            raise KeyError("bug")

        for _ in range(5):
            with pytest.raises(KeyError):
                await breaker.call(_bug)

        assert breaker.state == CircuitState.CLOSED
        assert breaker.failure_count == 0

    async def test_half_open_success_closes(self):
        breaker = self._create_breaker(recovery_timeout=0.05)
        for _ in range(3):
            with pytest.raises(ServiceDown):
                await breaker.call(_fail)

        await asyncio.sleep(0.06)

        assert await breaker.call(_ok) == "ok"
        assert breaker.state == CircuitState.CLOSED
        assert breaker.failure_count == 0

    async def test_half_open_failure_reopens(self):
        breaker = self._create_breaker(recovery_timeout=0.05)
        for _ in range(3):
            with pytest.raises(ServiceDown):
                await breaker.call(_fail)

        await asyncio.sleep(0.06)
        with pytest.raises(ServiceDown):
            await breaker.call(_fail)

        assert breaker.state == CircuitState.OPEN

    async def test_half_open_admits_single_probe(self):
        breaker = self._create_breaker(recovery_timeout=0.05)
        for _ in range(3):
            with pytest.raises(ServiceDown):
                await breaker.call(_fail)
        await asyncio.sleep(0.06)

        async def _slow():
            await asyncio.sleep(0.05)
            return "probe"

        probe = asyncio.create_task(breaker.call(_slow))
        await asyncio.sleep(0)

        assert breaker.state == CircuitState.HALF_OPEN
        with pytest.raises(CircuitBreakerError):
            await breaker.call(_ok)
        assert await probe == "probe"
        assert breaker.state == CircuitState.CLOSED

    async def test_guard_context(self):
        breaker = self._create_breaker()

        with pytest.raises(ServiceDown):
            async with breaker.guard():
                raise ServiceDown("down")

        assert breaker.failure_count == 1
        async with breaker.guard():
            pass
        assert breaker.failure_count == 0
