"""
Transaction entity - Domain model for ledger transactions.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


class TransactionType(str, Enum):
    """Ledger transaction types."""

    TIP = "tip"
    REWARD = "reward"
    WITHDRAWAL = "withdrawal"


class TransactionStatus(str, Enum):
    """Transaction processing states."""

    PENDING = "pending"
    COMPLETED = "completed"
    DENIED = "denied"


@dataclass
class Transaction:
    """
    Transaction entity recording one movement of sats.

    Business rules:
    - Amount is a positive integer number of sats
    - TIP has both sender and receiver, and they differ
    - REWARD is a system credit: no sender, a receiver
    - WITHDRAWAL has a sender, no receiver and a destination address
    - TIP and REWARD are always COMPLETED
    - WITHDRAWAL starts PENDING and moves exactly once to
      COMPLETED or DENIED
    """

    id: UUID = field(default_factory=uuid4)
    transaction_type: TransactionType = field(default=TransactionType.TIP)
    amount: int = field(default=0)
    sender_id: Optional[UUID] = field(default=None)
    receiver_id: Optional[UUID] = field(default=None)
    status: TransactionStatus = field(default=TransactionStatus.COMPLETED)
    destination_address: Optional[str] = field(default=None)
    external_transaction_id: Optional[str] = field(default=None)
    admin_id: Optional[UUID] = field(default=None)
    message: Optional[str] = field(default=None)
    processing_started_at: Optional[datetime] = field(default=None)
    resolved_at: Optional[datetime] = field(default=None)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate transaction data after initialization."""
        if isinstance(self.amount, bool) or not isinstance(self.amount, int):
            raise ValueError("Transaction amount must be an integer number of sats")

        if self.amount <= 0:
            raise ValueError("Transaction amount must be positive")

        if self.transaction_type == TransactionType.TIP:
            if self.sender_id is None or self.receiver_id is None:
                raise ValueError("Tip requires sender and receiver")
            if self.sender_id == self.receiver_id:
                raise ValueError("Tip sender and receiver must differ")

        elif self.transaction_type == TransactionType.REWARD:
            if self.receiver_id is None:
                raise ValueError("Reward requires a receiver")
            if self.sender_id is not None:
                raise ValueError("Reward is a system credit without sender")

        elif self.transaction_type == TransactionType.WITHDRAWAL:
            if self.sender_id is None:
                raise ValueError("Withdrawal requires a sender")
            if self.receiver_id is not None:
                raise ValueError("Withdrawal has no in-system receiver")
            if not self.destination_address:
                raise ValueError("Withdrawal requires a destination address")

        if (
            self.transaction_type != TransactionType.WITHDRAWAL
            and self.status != TransactionStatus.COMPLETED
        ):
            raise ValueError(
                f"{self.transaction_type.value} transactions are always completed"
            )

    # ================================================================
    # Factories
    # ================================================================

    @classmethod
    def tip(
        cls,
        sender_id: UUID,
        receiver_id: UUID,
        amount: int,
        message: Optional[str] = None,
    ) -> "Transaction":
        """Create a completed tip."""
        return cls(
            transaction_type=TransactionType.TIP,
            amount=amount,
            sender_id=sender_id,
            receiver_id=receiver_id,
            status=TransactionStatus.COMPLETED,
            message=message,
        )

    @classmethod
    def reward(
        cls, receiver_id: UUID, amount: int, message: Optional[str] = None
    ) -> "Transaction":
        """Create a completed system credit."""
        return cls(
            transaction_type=TransactionType.REWARD,
            amount=amount,
            receiver_id=receiver_id,
            status=TransactionStatus.COMPLETED,
            message=message,
        )

    @classmethod
    def withdrawal(
        cls, sender_id: UUID, destination_address: str, amount: int
    ) -> "Transaction":
        """Create a pending withdrawal request."""
        return cls(
            transaction_type=TransactionType.WITHDRAWAL,
            amount=amount,
            sender_id=sender_id,
            status=TransactionStatus.PENDING,
            destination_address=destination_address,
        )

    # ================================================================
    # State transitions
    # ================================================================

    @property
    def is_pending(self) -> bool:
        return self.status == TransactionStatus.PENDING

    @property
    def is_in_flight(self) -> bool:
        """A payment attempt was started and not resolved."""
        return self.is_pending and self.processing_started_at is not None

    def _require_pending_withdrawal(self, action: str) -> None:
        if self.transaction_type != TransactionType.WITHDRAWAL:
            raise ValueError(
                f"Cannot {action} {self.transaction_type.value} transaction"
            )
        if self.status != TransactionStatus.PENDING:
            raise ValueError(
                f"Cannot {action} transaction in {self.status.value} status"
            )

    def start_processing(self) -> None:
        """
        Mark the payout as in flight.

        Raises:
            ValueError: If not a pending, unclaimed withdrawal
        """
        self._require_pending_withdrawal("process")
        if self.processing_started_at is not None:
            raise ValueError("Withdrawal is already being processed")
        self.processing_started_at = datetime.now()

    def complete(self, external_transaction_id: Optional[str], admin_id: UUID) -> None:
        """
        Mark withdrawal as paid out.

        Raises:
            ValueError: If not a pending withdrawal
        """
        self._require_pending_withdrawal("complete")
        self.status = TransactionStatus.COMPLETED
        self.external_transaction_id = external_transaction_id
        self.admin_id = admin_id
        self.resolved_at = datetime.now()

    def deny(self, admin_id: UUID) -> None:
        """
        Mark withdrawal as denied.

        Raises:
            ValueError: If not a pending withdrawal
        """
        self._require_pending_withdrawal("deny")
        self.status = TransactionStatus.DENIED
        self.admin_id = admin_id
        self.resolved_at = datetime.now()

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": str(self.id),
            "type": self.transaction_type.value,
            "amount": self.amount,
            "sender_id": str(self.sender_id) if self.sender_id else None,
            "receiver_id": str(self.receiver_id) if self.receiver_id else None,
            "status": self.status.value,
            "destination_address": self.destination_address,
            "external_transaction_id": self.external_transaction_id,
            "admin_id": str(self.admin_id) if self.admin_id else None,
            "message": self.message,
            "processing_started_at": (
                self.processing_started_at.isoformat()
                if self.processing_started_at
                else None
            ),
            "resolved_at": self.resolved_at.isoformat() if self.resolved_at else None,
            "created_at": self.created_at.isoformat(),
        }
