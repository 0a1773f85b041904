"""
Real-time relay infrastructure.
"""

from satstream.infrastructure.relay.broadcast_hub import BroadcastHub, RelayClient
from satstream.infrastructure.relay.relay_publisher import RelayPublisher

__all__ = ["BroadcastHub", "RelayClient", "RelayPublisher"]
