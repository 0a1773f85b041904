"""
Relay event publisher adapter.

Publishes ledger events to connected real-time viewers.
"""

from typing import Optional
from uuid import UUID

from satstream.domain.services.i_event_publisher import IEventPublisher
from satstream.infrastructure.monitoring import get_logger
from satstream.infrastructure.relay.broadcast_hub import BroadcastHub

logger = get_logger(__name__)


class RelayPublisher(IEventPublisher):
    """
    Broadcast-hub-based event publisher.

    Never raises: delivery failures are logged and swallowed so a
    committed tip is never reported as failed.
    """

    def __init__(self, hub: BroadcastHub):
        """
        Initialize publisher with broadcast hub.

        Args:
            hub: Shared broadcast hub instance
        """
        self.hub = hub

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
        event = {
            "amount": amount,
            "fromUsername": from_username,
            "toUsername": to_username,
        }
        if post_id is not None:
            event["postId"] = str(post_id)

        try:
            await self.hub.publish("tip-received", event)
        except Exception:
            logger.exception("Failed to publish tip-received event")
