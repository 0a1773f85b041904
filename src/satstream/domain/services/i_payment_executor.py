"""
Payment executor service interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PaymentResult:
    """Outcome reported by the payment network."""

    success: bool
    external_transaction_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, error: str) -> "PaymentResult":
        return cls(success=False, error=error)


class IPaymentExecutor(ABC):
    """
    Abstract capability that moves sats outside the internal ledger.

    Calls may be slow and may fail. Implementations raise
    PaymentExecutorUnavailableError when the network was not reached
    (nothing was paid) and PaymentExecutorError when the outcome is
    unknown. A PaymentResult with success=False means the network
    rejected the payment.
    """

    @abstractmethod
    def validate_address(self, address: str) -> bool:
        """
        Check destination format.

        Args:
            address: Lightning invoice (lnbc/lntb) or on-chain address
                (bc1/1/3)

        Returns:
            True if the format is recognized
        """

    @abstractmethod
    async def send_payment(self, invoice: str) -> PaymentResult:
        """
        Pay a Lightning invoice.

        Args:
            invoice: BOLT11 invoice carrying its own amount

        Returns:
            Payment outcome
        """

    @abstractmethod
    async def send_onchain(self, address: str, amount_sats: int) -> PaymentResult:
        """
        Send an on-chain payment.

        Args:
            address: Bitcoin address
            amount_sats: Amount in satoshis

        Returns:
            Payment outcome
        """

    @abstractmethod
    async def get_balance(self) -> int:
        """
        Node-custodied balance in sats.

        Informational only, never used for transfer checks.
        """

    async def close(self) -> None:
        """Release network resources."""
