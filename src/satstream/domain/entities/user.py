"""
User entity - Domain model for platform users.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """
    User entity holding an internal sat balance.

    Business rules:
    - Username and email are required and never change after creation
    - Balance is an integer number of sats and is never negative
    - Balance is only changed by the ledger store, never assigned here
    """

    id: UUID = field(default_factory=uuid4)
    username: str = field(default="")
    email: str = field(default="")
    balance: int = field(default=0)
    is_admin: bool = field(default=False)
    is_banned: bool = field(default=False)
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self):
        """Validate user data after initialization."""
        if not self.username:
            raise ValueError("Username is required")

        if not self.email or "@" not in self.email:
            raise ValueError(f"Invalid email: {self.email!r}")

        if isinstance(self.balance, bool) or not isinstance(self.balance, int):
            raise ValueError("Balance must be an integer number of sats")

        if self.balance < 0:
            raise ValueError("Balance cannot be negative")

    def to_public(self) -> dict:
        """Public identity projection (no balance, no flags)."""
        return {
            "id": str(self.id),
            "username": self.username,
        }

    def to_dict(self) -> dict:
        """Convert entity to dictionary representation."""
        return {
            "id": str(self.id),
            "username": self.username,
            "email": self.email,
            "balance": self.balance,
            "is_admin": self.is_admin,
            "is_banned": self.is_banned,
            "created_at": self.created_at.isoformat(),
        }
