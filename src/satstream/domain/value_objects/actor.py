"""
Actor value object - authenticated identity handed to every operation.
"""

from dataclasses import dataclass
from uuid import UUID

from satstream.domain.entities.user import User
from satstream.domain.exceptions import AdminRequiredError, UserBannedError


@dataclass(frozen=True)
class Actor:
    """
    Authenticated caller.

    The balance is a snapshot taken at authentication time. It is
    informational only; ledger decisions always re-read the store.
    """

    id: UUID
    is_admin: bool = False
    is_banned: bool = False
    balance: int = 0

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(
            id=user.id,
            is_admin=user.is_admin,
            is_banned=user.is_banned,
            balance=user.balance,
        )

    def ensure_active(self) -> None:
        """Raise UserBannedError for banned actors."""
        if self.is_banned:
            raise UserBannedError(str(self.id))

    def ensure_admin(self, operation: str) -> None:
        """Raise AdminRequiredError unless actor is an active admin."""
        self.ensure_active()
        if not self.is_admin:
            raise AdminRequiredError(operation)
