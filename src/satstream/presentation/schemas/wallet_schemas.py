"""
API schemas for wallet, tip and reaction operations.

Request and response models for user-facing ledger endpoints. Amounts
are whole sats; strict integers reject floats and numeric strings.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, StrictInt

from satstream.application.dto.ledger_dto import TransactionView, UserIdentity
from satstream.domain.entities.reaction import Reaction
from satstream.domain.entities.transaction import Transaction


class UserIdentityResponse(BaseModel):
    """Transaction party."""

    id: UUID
    username: str
    email: Optional[str] = None

    @classmethod
    def from_identity(
        cls, identity: Optional[UserIdentity]
    ) -> Optional["UserIdentityResponse"]:
        if identity is None:
            return None
        return cls(id=identity.id, username=identity.username, email=identity.email)


class TransactionResponse(BaseModel):
    """Ledger transaction."""

    id: UUID
    type: str = Field(..., examples=["tip"])
    amount: int = Field(..., description="Amount in sats", examples=[1000])
    status: str = Field(..., examples=["completed"])
    sender_id: Optional[UUID] = None
    receiver_id: Optional[UUID] = None
    destination_address: Optional[str] = None
    external_transaction_id: Optional[str] = None
    message: Optional[str] = None
    created_at: datetime
    resolved_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, transaction: Transaction) -> "TransactionResponse":
        return cls(
            id=transaction.id,
            type=transaction.transaction_type.value,
            amount=transaction.amount,
            status=transaction.status.value,
            sender_id=transaction.sender_id,
            receiver_id=transaction.receiver_id,
            destination_address=transaction.destination_address,
            external_transaction_id=transaction.external_transaction_id,
            message=transaction.message,
            created_at=transaction.created_at,
            resolved_at=transaction.resolved_at,
        )


class TransactionHistoryItem(TransactionResponse):
    """Transaction with resolved sender and receiver identities."""

    sender: Optional[UserIdentityResponse] = None
    receiver: Optional[UserIdentityResponse] = None

    @classmethod
    def from_view(cls, view: TransactionView) -> "TransactionHistoryItem":
        base = TransactionResponse.from_entity(view.transaction)
        return cls(
            **base.model_dump(),
            sender=UserIdentityResponse.from_identity(view.sender),
            receiver=UserIdentityResponse.from_identity(view.receiver),
        )


class WalletResponse(BaseModel):
    """Balance overview."""

    user_id: UUID
    username: str
    balance: int = Field(..., description="Spendable balance in sats")
    pending_withdrawal_total: int = Field(
        ..., description="Sats requested in pending withdrawals"
    )
    node_balance: Optional[int] = Field(
        None, description="Node-custodied sats (admins only)"
    )


class SendTipRequest(BaseModel):
    """Tip another user."""

    receiver_id: UUID
    amount: StrictInt = Field(..., description="Amount in sats", examples=[500])
    message: Optional[str] = Field(None, max_length=280)


class WithdrawalRequest(BaseModel):
    """Request a payout to a Lightning invoice or Bitcoin address."""

    destination_address: str = Field(
        ..., min_length=1, examples=["lntb10u1pjexample"]
    )
    amount: StrictInt = Field(..., description="Amount in sats", examples=[10000])


class ReactRequest(BaseModel):
    """Like or tip a post."""

    reaction_type: str = Field(..., examples=["tip"])
    amount: Optional[StrictInt] = Field(None, description="Tip amount in sats")


class ReactionResponse(BaseModel):
    """Recorded reaction."""

    id: UUID
    post_id: UUID
    user_id: UUID
    reaction_type: str
    amount: Optional[int] = None
    transaction_id: Optional[UUID] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, reaction: Reaction) -> "ReactionResponse":
        return cls(
            id=reaction.id,
            post_id=reaction.post_id,
            user_id=reaction.user_id,
            reaction_type=reaction.reaction_type.value,
            amount=reaction.amount,
            transaction_id=reaction.transaction_id,
            created_at=reaction.created_at,
        )
