"""
Domain service interfaces.
"""

from satstream.domain.services.i_event_publisher import IEventPublisher
from satstream.domain.services.i_payment_executor import (
    IPaymentExecutor,
    PaymentResult,
)
from satstream.domain.services.i_user_locks import IUserLocks

__all__ = [
    "IEventPublisher",
    "IPaymentExecutor",
    "IUserLocks",
    "PaymentResult",
]
