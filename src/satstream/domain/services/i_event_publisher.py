"""
Event publisher service interface.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID


class IEventPublisher(ABC):
    """
    Abstract publisher for real-time notifications.

    Delivery is best-effort and at most once. Ledger correctness never
    depends on a publish succeeding.
    """

    @abstractmethod
    async def publish_tip_received(
        self,
        amount: int,
        from_username: str,
        to_username: str,
        post_id: Optional[UUID] = None,
    ) -> None:
        """
        Publish tip-received event.

        Args:
            amount: Tip amount in sats
            from_username: Sender username
            to_username: Receiver username
            post_id: Post the tip was attached to, if any
        """
