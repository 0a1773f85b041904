"""
Withdrawal workflow and payment executor exceptions.
"""

from typing import Optional

from satstream.domain.exceptions.base import SatStreamException


class InvalidDestinationError(SatStreamException):
    """Raised when a withdrawal destination is not a recognized format."""

    def __init__(self, address: str):
        self.address = address
        shown = address if len(address) <= 24 else f"{address[:24]}..."
        super().__init__(
            f"Invalid Lightning invoice or Bitcoin address: {shown}",
            code="INVALID_DESTINATION",
        )


class TransactionNotFoundError(SatStreamException):
    """Raised when a transaction id does not exist."""

    def __init__(self, transaction_id: str):
        self.transaction_id = transaction_id
        super().__init__(
            f"Transaction {transaction_id} not found",
            code="TRANSACTION_NOT_FOUND",
        )


class TransactionNotPendingError(SatStreamException):
    """
    Raised when a withdrawal was already resolved or is being processed.

    Idempotent callers can treat this as "already happened".
    """

    def __init__(self, transaction_id: str, status: str):
        self.transaction_id = transaction_id
        self.status = status
        super().__init__(
            f"Transaction {transaction_id} already processed (status: {status})",
            code="ALREADY_PROCESSED",
        )


class PaymentFailedError(SatStreamException):
    """
    Raised when the payment executor did not confirm a payout.

    requires_reconciliation is True when the outcome is unknown and the
    withdrawal was left pending for manual review.
    """

    def __init__(
        self,
        reason: str,
        transaction_id: Optional[str] = None,
        requires_reconciliation: bool = False,
    ):
        self.reason = reason
        self.transaction_id = transaction_id
        self.requires_reconciliation = requires_reconciliation
        super().__init__(f"Payment failed: {reason}", code="PAYMENT_FAILED")


class PaymentExecutorError(SatStreamException):
    """Raised by the payment executor when the outcome of a call is unknown."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, code="PAYMENT_EXECUTOR_ERROR")


class PaymentExecutorUnavailableError(PaymentExecutorError):
    """Raised when the payment executor was not reached at all."""

    def __init__(self, message: str = "Payment executor unavailable"):
        super().__init__(message)
        self.code = "PAYMENT_EXECUTOR_UNAVAILABLE"
