"""
Reaction entity - engagement annotation on a post.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


class ReactionType(str, Enum):
    """Reaction kinds."""

    LIKE = "like"
    TIP = "tip"


@dataclass
class Reaction:
    """
    Reaction on a post.

    Business rules:
    - LIKE reactions carry no amount
    - TIP reactions carry a positive amount and reference the tip
      transaction that actually moved the sats
    """

    id: UUID = field(default_factory=uuid4)
    post_id: UUID = field(default_factory=uuid4)
    user_id: UUID = field(default_factory=uuid4)
    reaction_type: ReactionType = field(default=ReactionType.LIKE)
    amount: Optional[int] = field(default=None)
    transaction_id: Optional[UUID] = field(default=None)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate reaction data after initialization."""
        if self.reaction_type == ReactionType.TIP:
            if self.amount is None or self.amount <= 0:
                raise ValueError("Tip reaction amount must be positive")
            if self.transaction_id is None:
                raise ValueError("Tip reaction requires a transaction_id")
        elif self.amount is not None:
            raise ValueError("Like reaction cannot carry an amount")

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": str(self.id),
            "post_id": str(self.post_id),
            "user_id": str(self.user_id),
            "reaction_type": self.reaction_type.value,
            "amount": self.amount,
            "transaction_id": (
                str(self.transaction_id) if self.transaction_id else None
            ),
            "created_at": self.created_at.isoformat(),
        }
