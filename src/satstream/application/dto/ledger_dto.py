"""
Ledger read models returned by use cases.

Identity projections are resolved with explicit user lookups, never
with ad hoc joins, so every field has a single well-defined source.
"""

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from satstream.domain.entities.transaction import Transaction
from satstream.domain.entities.user import User


@dataclass(frozen=True)
class UserIdentity:
    """Public identity of a transaction party."""

    id: UUID
    username: str
    email: Optional[str] = None

    @classmethod
    def public(cls, user: User) -> "UserIdentity":
        return cls(id=user.id, username=user.username)

    @classmethod
    def with_contact(cls, user: User) -> "UserIdentity":
        """Identity including email, for the admin surface."""
        return cls(id=user.id, username=user.username, email=user.email)


@dataclass
class TransactionView:
    """Transaction with optional sender and receiver identities."""

    transaction: Transaction
    sender: Optional[UserIdentity] = None
    receiver: Optional[UserIdentity] = None


@dataclass
class PendingWithdrawalView:
    """Pending withdrawal joined with its requester."""

    transaction: Transaction
    requester: Optional[UserIdentity]


@dataclass
class ReconciliationItem:
    """
    Withdrawal stuck in pending past the operational threshold.

    in_flight is True when a payment attempt was started; those cannot be
    resolved without checking the payment network first.
    """

    transaction: Transaction
    requester: Optional[UserIdentity]
    in_flight: bool
    age_minutes: int


@dataclass
class WalletSummary:
    """Balance overview for one user."""

    user_id: UUID
    username: str
    balance: int
    pending_withdrawal_total: int
    node_balance: Optional[int] = None


@dataclass(frozen=True)
class BalanceMismatch:
    """User whose stored balance disagrees with the transaction log."""

    user_id: UUID
    username: str
    stored_balance: int
    computed_balance: int

    @property
    def difference(self) -> int:
        return self.stored_balance - self.computed_balance


@dataclass
class LedgerAuditReport:
    """Result of recomputing every balance from completed transactions."""

    users_checked: int
    transactions_checked: int
    total_balance: int
    mismatches: list[BalanceMismatch] = field(default_factory=list)

    @property
    def is_consistent(self) -> bool:
        return not self.mismatches
