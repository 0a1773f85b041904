"""
Shared test helpers.
"""

from tests.helpers.fakes import (
    FakePaymentExecutor,
    MockUnitOfWork,
    RecordingPublisher,
)
from tests.helpers.ledger import (
    balance_of,
    total_balance,
    total_rewards_minus_withdrawals,
)

__all__ = [
    "FakePaymentExecutor",
    "MockUnitOfWork",
    "RecordingPublisher",
    "balance_of",
    "total_balance",
    "total_rewards_minus_withdrawals",
]
