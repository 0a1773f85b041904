"""
Broadcast hub for real-time relay clients.
"""

import json
from typing import Any, Dict, Protocol
from uuid import uuid4

from satstream.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class RelayClient(Protocol):
    """Anything that can receive a text frame (FastAPI WebSocket fits)."""

    async def send_text(self, data: str) -> None: ...


class BroadcastHub:
    """
    Registry of connected relay clients with fan-out publish.

    Publishing is best-effort: a client whose send fails is dropped and
    the remaining clients still receive the event.
    """

    def __init__(self, max_clients: int = 0):
        """
        Args:
            max_clients: Connection cap, 0 for unlimited
        """
        self.max_clients = max_clients
        self._clients: Dict[str, RelayClient] = {}

    @property
    def client_count(self) -> int:
        return len(self._clients)

    def register(self, client: RelayClient) -> str:
        """
        Add a client.

        Returns:
            Client id to pass to unregister()

        Raises:
            ConnectionRefusedError: If the hub is full
        """
        if self.max_clients and len(self._clients) >= self.max_clients:
            raise ConnectionRefusedError(
                f"Relay connection limit reached: {self.max_clients}"
            )

        client_id = str(uuid4())
        self._clients[client_id] = client
        metrics.relay_connections.set(len(self._clients))
        logger.debug(
            f"Relay client {client_id} registered ({len(self._clients)} total)"
        )
        return client_id

    def unregister(self, client_id: str) -> None:
        """Remove a client; unknown ids are ignored."""
        if self._clients.pop(client_id, None) is not None:
            metrics.relay_connections.set(len(self._clients))
            logger.debug(f"Relay client {client_id} unregistered")

    async def publish(self, event_type: str, data: Dict[str, Any]) -> int:
        """
        Send {"type": event_type, "data": data} to every client.

        Returns:
            Number of clients that received the event
        """
        message = json.dumps({"type": event_type, "data": data}, default=str)
        delivered = 0

        for client_id, client in list(self._clients.items()):
            try:
                await client.send_text(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping relay client {client_id}: {e}")
                self.unregister(client_id)

        metrics.relay_events_total.labels(event_type=event_type).inc()
        return delivered
