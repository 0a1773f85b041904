"""
Circuit breaker guarding calls to the Lightning node bridge.
"""

import time
from contextlib import asynccontextmanager
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

from satstream.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)

T = TypeVar("T")


class CircuitState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


_GAUGE_VALUE = {CircuitState.CLOSED: 0, CircuitState.OPEN: 1, CircuitState.HALF_OPEN: 2}


class CircuitBreakerError(Exception):
    """Call refused without reaching the service."""


class CircuitBreaker:
    """
    Consecutive-failure circuit breaker.

    CLOSED: calls pass; `failure_threshold` consecutive failures open
    the circuit.
    OPEN: calls are refused until `recovery_timeout` seconds after the
    last failure.
    HALF_OPEN: exactly one probe call is let through; its outcome closes
    or re-opens the circuit. Other callers are refused while it runs.

    Only exceptions matching `expected_exception` count as failures, so
    a node that answers "payment rejected" does not trip the breaker.
    """

    def __init__(
        self,
        name: str,
        failure_threshold: int = 5,
        recovery_timeout: float = 60.0,
        expected_exception: type | tuple[type, ...] = Exception,
    ):
        self.name = name
        self.failure_threshold = failure_threshold
        self.recovery_timeout = recovery_timeout
        self.expected_exception = expected_exception

        self._state = CircuitState.CLOSED
        self._failures = 0
        self._opened_at: Optional[float] = None
        self._probe_running = False
        metrics.circuit_breaker_state.labels(service=name).set(
            _GAUGE_VALUE[self._state]
        )

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failures

    def _transition(self, state: CircuitState) -> None:
        if state == self._state:
            return
        logger.warning(
            f"Circuit breaker {self.name}: {self._state.value} -> {state.value} "
            f"after {self._failures} consecutive failures"
        )
        self._state = state
        metrics.circuit_breaker_state.labels(service=self.name).set(
            _GAUGE_VALUE[state]
        )

    def _admit(self) -> bool:
        """Decide whether a call may proceed; returns True for the probe call."""
        if self._state == CircuitState.CLOSED:
            return False

        elapsed = time.monotonic() - (self._opened_at or 0.0)
        if self._state == CircuitState.OPEN and elapsed >= self.recovery_timeout:
            self._transition(CircuitState.HALF_OPEN)

        if self._state == CircuitState.HALF_OPEN and not self._probe_running:
            self._probe_running = True
            return True

        retry_in = max(self.recovery_timeout - elapsed, 0.0)
        raise CircuitBreakerError(
            f"Circuit breaker {self.name} is {self._state.value}; "
            f"retry in {retry_in:.0f}s"
        )

    @asynccontextmanager
    async def guard(self):
        """
        Protect one call to the service.

        Usage:
            async with breaker.guard():
                await session.post(...)

        Raises:
            CircuitBreakerError: Circuit open or probe already running
        """
        is_probe = self._admit()
        try:
            yield
        except self.expected_exception:
            self._failures += 1
            if is_probe or self._failures >= self.failure_threshold:
                self._opened_at = time.monotonic()
                self._transition(CircuitState.OPEN)
            raise
        else:
            self._failures = 0
            self._transition(CircuitState.CLOSED)
        finally:
            if is_probe:
                self._probe_running = False

    async def call(self, func: Callable[..., Awaitable[T]], *args, **kwargs) -> T:
        """Run `func(*args, **kwargs)` under `guard()`."""
        async with self.guard():
            return await func(*args, **kwargs)
