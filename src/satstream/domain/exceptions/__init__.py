"""
Domain exceptions package.
"""

# Auth exceptions
from satstream.domain.exceptions.auth import (
    AdminRequiredError,
    ExpiredTokenError,
    InvalidTokenError,
    UserBannedError,
)

# Base exceptions
from satstream.domain.exceptions.base import (
    DuplicateEntityError,
    EntityNotFoundError,
    SatStreamException,
    ValidationError,
)

# Ledger exceptions
from satstream.domain.exceptions.ledger import (
    InsufficientFundsError,
    LedgerInvariantError,
    RecipientNotFoundError,
    SelfTipError,
)

# Withdrawal exceptions
from satstream.domain.exceptions.withdrawal import (
    InvalidDestinationError,
    PaymentExecutorError,
    PaymentExecutorUnavailableError,
    PaymentFailedError,
    TransactionNotFoundError,
    TransactionNotPendingError,
)

__all__ = [
    # Base
    "SatStreamException",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "ValidationError",
    # Auth
    "InvalidTokenError",
    "ExpiredTokenError",
    "UserBannedError",
    "AdminRequiredError",
    # Ledger
    "InsufficientFundsError",
    "RecipientNotFoundError",
    "SelfTipError",
    "LedgerInvariantError",
    # Withdrawal
    "InvalidDestinationError",
    "TransactionNotFoundError",
    "TransactionNotPendingError",
    "PaymentFailedError",
    "PaymentExecutorError",
    "PaymentExecutorUnavailableError",
]
