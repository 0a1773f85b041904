"""
API schemas for the admin review surface.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from satstream.application.dto.ledger_dto import (
    LedgerAuditReport,
    PendingWithdrawalView,
    ReconciliationItem,
)
from satstream.presentation.schemas.wallet_schemas import (
    TransactionResponse,
    UserIdentityResponse,
)


class PendingWithdrawalResponse(TransactionResponse):
    """Pending withdrawal with requester contact details."""

    requester: Optional[UserIdentityResponse] = None
    in_flight: bool = False

    @classmethod
    def from_view(cls, view: PendingWithdrawalView) -> "PendingWithdrawalResponse":
        base = TransactionResponse.from_entity(view.transaction)
        return cls(
            **base.model_dump(),
            requester=UserIdentityResponse.from_identity(view.requester),
            in_flight=view.transaction.is_in_flight,
        )


class ReconciliationItemResponse(TransactionResponse):
    """Stale withdrawal awaiting manual resolution."""

    requester: Optional[UserIdentityResponse] = None
    in_flight: bool
    age_minutes: int

    @classmethod
    def from_item(cls, item: ReconciliationItem) -> "ReconciliationItemResponse":
        base = TransactionResponse.from_entity(item.transaction)
        return cls(
            **base.model_dump(),
            requester=UserIdentityResponse.from_identity(item.requester),
            in_flight=item.in_flight,
            age_minutes=item.age_minutes,
        )


class ReconcileRequest(BaseModel):
    """Operator's finding from the payment network."""

    outcome: str = Field(..., examples=["paid"])
    external_transaction_id: Optional[str] = Field(None, max_length=255)


class BanRequest(BaseModel):
    """Ban or unban a user."""

    banned: bool = True


class UserStatusResponse(BaseModel):
    """User moderation status."""

    id: UUID
    username: str
    is_banned: bool


class BalanceMismatchResponse(BaseModel):
    user_id: UUID
    username: str
    stored_balance: int
    computed_balance: int
    difference: int


class LedgerAuditResponse(BaseModel):
    """Result of recomputing balances from completed transactions."""

    consistent: bool
    users_checked: int
    transactions_checked: int
    total_balance: int
    mismatches: list[BalanceMismatchResponse]

    @classmethod
    def from_report(cls, report: LedgerAuditReport) -> "LedgerAuditResponse":
        return cls(
            consistent=report.is_consistent,
            users_checked=report.users_checked,
            transactions_checked=report.transactions_checked,
            total_balance=report.total_balance,
            mismatches=[
                BalanceMismatchResponse(
                    user_id=m.user_id,
                    username=m.username,
                    stored_balance=m.stored_balance,
                    computed_balance=m.computed_balance,
                    difference=m.difference,
                )
                for m in report.mismatches
            ],
        )
