"""
Unit tests for BroadcastHub and RelayPublisher.

Usage:
    pytest tests/unit/infrastructure/test_relay.py
"""

import json
from uuid import uuid4

import pytest

from satstream.infrastructure.relay import BroadcastHub, RelayPublisher


class RecordingClient:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.messages: list[dict] = []

    async def send_text(self, data: str) -> None:
        if self.fail:
            raise ConnectionResetError("gone")
        self.messages.append(json.loads(data))


class TestBroadcastHub:
    async def test_publish_reaches_every_client(self):
        hub = BroadcastHub()
        first, second = RecordingClient(), RecordingClient()
        hub.register(first)
        hub.register(second)

        delivered = await hub.publish("tip-received", {"amount": 5})

        assert delivered == 2
        assert first.messages == [{"type": "tip-received", "data": {"amount": 5}}]
        assert second.messages == first.messages

    async def test_failing_client_is_dropped(self):
        hub = BroadcastHub()
        healthy = RecordingClient()
        hub.register(RecordingClient(fail=True))
        hub.register(healthy)

        delivered = await hub.publish("tip-received", {"amount": 1})

        assert delivered == 1
        assert hub.client_count == 1
        assert len(healthy.messages) == 1

    async def test_unregister(self):
        hub = BroadcastHub()
        client = RecordingClient()
        client_id = hub.register(client)
        hub.unregister(client_id)
        hub.unregister(client_id)

        assert await hub.publish("tip-received", {}) == 0
        assert client.messages == []

    def test_connection_limit(self):
        hub = BroadcastHub(max_clients=1)
        hub.register(RecordingClient())

        with pytest.raises(ConnectionRefusedError):
            hub.register(RecordingClient())


class TestRelayPublisher:
    async def test_tip_received_payload(self):
        hub = BroadcastHub()
        client = RecordingClient()
        hub.register(client)
        post_id = uuid4()

        await RelayPublisher(hub).publish_tip_received(
            amount=210, from_username="alice", to_username="bob", post_id=post_id
        )

        assert client.messages == [
            {
                "type": "tip-received",
                "data": {
                    "amount": 210,
                    "fromUsername": "alice",
                    "toUsername": "bob",
                    "postId": str(post_id),
                },
            }
        ]

    async def test_post_id_omitted_for_direct_tips(self):
        hub = BroadcastHub()
        client = RecordingClient()
        hub.register(client)

        await RelayPublisher(hub).publish_tip_received(
            amount=1, from_username="alice", to_username="bob"
        )

        assert "postId" not in client.messages[0]["data"]

    async def test_publisher_never_raises(self):
        class BrokenHub(BroadcastHub):
            async def publish(self, event_type, data):
                raise RuntimeError("hub exploded")

        await RelayPublisher(BrokenHub()).publish_tip_received(
            amount=1, from_username="alice", to_username="bob"
        )
