"""
SQLAlchemy models for SatStream persistence.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""


class UserModel(Base):
    """User database model with the internal sat balance."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="balance_non_negative"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    username: Mapped[str] = mapped_column(
        String(50), unique=True, index=True, nullable=False
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)


class PostModel(Base):
    """Post database model."""

    __tablename__ = "posts"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), index=True, nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)


class TransactionModel(Base):
    """Ledger transaction database model."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="amount_positive"),
        CheckConstraint(
            "transaction_type IN ('tip', 'reward', 'withdrawal')",
            name="valid_transaction_type",
        ),
        CheckConstraint(
            "status IN ('pending', 'completed', 'denied')",
            name="valid_transaction_status",
        ),
        CheckConstraint(
            "transaction_type != 'withdrawal' OR destination_address IS NOT NULL",
            name="withdrawal_has_destination",
        ),
        Index("ix_transactions_type_status", "transaction_type", "status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    sender_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id"), index=True
    )
    receiver_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("users.id"), index=True
    )
    transaction_type: Mapped[str] = mapped_column(String(20), nullable=False)
    amount: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    destination_address: Mapped[str | None] = mapped_column(Text)
    external_transaction_id: Mapped[str | None] = mapped_column(String(255))
    admin_id: Mapped[UUID | None] = mapped_column(Uuid, ForeignKey("users.id"))
    message: Mapped[str | None] = mapped_column(String(280))
    processing_started_at: Mapped[datetime | None] = mapped_column(DateTime)
    resolved_at: Mapped[datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, index=True
    )


class ReactionModel(Base):
    """Reaction database model."""

    __tablename__ = "reactions"
    __table_args__ = (
        CheckConstraint(
            "reaction_type IN ('like', 'tip')", name="valid_reaction_type"
        ),
        CheckConstraint(
            "reaction_type != 'tip' OR (amount > 0 AND transaction_id IS NOT NULL)",
            name="tip_reaction_backed_by_transaction",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    post_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("posts.id"), index=True, nullable=False
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), index=True, nullable=False
    )
    reaction_type: Mapped[str] = mapped_column(String(10), nullable=False)
    amount: Mapped[int | None] = mapped_column(BigInteger)
    transaction_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("transactions.id"), unique=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
