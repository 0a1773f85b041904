"""
Payment executor infrastructure.
"""

from satstream.infrastructure.payments.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerError,
    CircuitState,
)
from satstream.infrastructure.payments.lightning_node_client import (
    LightningNodeClient,
)

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerError",
    "CircuitState",
    "LightningNodeClient",
]
