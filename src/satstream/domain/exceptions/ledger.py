"""
Ledger and tip exceptions.
"""

from satstream.domain.exceptions.base import SatStreamException


class InsufficientFundsError(SatStreamException):
    """Raised when a balance cannot cover a debit."""

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        message = (
            f"Insufficient balance. Required: {required} sats, "
            f"Available: {available} sats"
        )
        super().__init__(message, code="INSUFFICIENT_FUNDS")


class RecipientNotFoundError(SatStreamException):
    """Raised when a tip targets a user that does not exist."""

    def __init__(self, receiver_id: str):
        self.receiver_id = receiver_id
        super().__init__(
            f"Recipient {receiver_id} not found",
            code="RECIPIENT_NOT_FOUND",
        )


class SelfTipError(SatStreamException):
    """Raised when sender and receiver of a tip are the same user."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            f"User {user_id} cannot tip themselves",
            code="SELF_TIP",
        )


class LedgerInvariantError(SatStreamException):
    """Raised when balance changes in a unit of work are not backed by transactions."""

    def __init__(self, message: str):
        super().__init__(message, code="LEDGER_INVARIANT")
