"""Tests for the collaboration hub — delivery, idempotency, presence, dead letters."""

import pytest

from qtrack.collaboration import CollaborationHub, MessageType, build_event, ticket_topic


class TestEnvelope:
    def test_build_event(self):
        event = build_event(MessageType.NOTIFICATION, ticket_topic("t-1"), {"text": "hi"})
        assert event.topic == "ticket:t-1"
        assert event.id
        assert event.time

    def test_to_dict(self):
        event = build_event(MessageType.COMMENT_ADDED, "ticket:t-1", {"id": "c-1"})
        payload = event.to_dict()
        assert payload["type"] == "comment.added"
        assert payload["data"] == {"id": "c-1"}


class TestCollaborationHub:
    @pytest.mark.asyncio
    async def test_delivers_to_topic_subscribers_only(self):
        hub = CollaborationHub()
        got_a, got_b = [], []

        async def on_a(event):
            got_a.append(event)

        async def on_b(event):
            got_b.append(event)

        hub.subscribe("ticket:a", on_a)
        hub.subscribe("ticket:b", on_b)
        await hub.publish(build_event(MessageType.NOTIFICATION, "ticket:a", {}))
        assert len(got_a) == 1
        assert got_b == []

    @pytest.mark.asyncio
    async def test_publish_is_idempotent(self):
        hub = CollaborationHub()
        received = []

        async def handler(event):
            received.append(event)

        hub.subscribe("ticket:a", handler)
        event = build_event(MessageType.NOTIFICATION, "ticket:a", {})
        await hub.publish(event)
        await hub.publish(event)
        assert len(received) == 1
        assert len(hub.recent("ticket:a")) == 1

    @pytest.mark.asyncio
    async def test_seen_ids_stay_bounded(self):
        hub = CollaborationHub(recent_limit=5)
        received = []

        async def handler(event):
            received.append(event)

        hub.subscribe("ticket:a", handler)
        last = None
        for _ in range(1000):
            last = build_event(MessageType.NOTIFICATION, "ticket:a", {})
            await hub.publish(last)

        assert len(received) == 1000
        assert len(hub._processed_ids) <= 5
        await hub.publish(last)
        assert len(received) == 1000

    @pytest.mark.asyncio
    async def test_unsubscribe(self):
        hub = CollaborationHub()
        received = []

        async def handler(event):
            received.append(event)

        hub.subscribe("ticket:a", handler)
        hub.unsubscribe("ticket:a", handler)
        hub.unsubscribe("ticket:zzz", handler)
        await hub.publish(build_event(MessageType.NOTIFICATION, "ticket:a", {}))
        assert received == []

    @pytest.mark.asyncio
    async def test_failing_handler_goes_to_dead_letters(self):
        hub = CollaborationHub()
        received = []

        async def broken(event):
            raise RuntimeError("socket closed")

        async def healthy(event):
            received.append(event)

        hub.subscribe("ticket:a", broken)
        hub.subscribe("ticket:a", healthy)
        await hub.publish(build_event(MessageType.NOTIFICATION, "ticket:a", {}))

        assert len(received) == 1
        assert len(hub.dead_letters) == 1
        assert hub.dead_letters[0].error == "socket closed"

    @pytest.mark.asyncio
    async def test_presence(self):
        hub = CollaborationHub()
        topic = ticket_topic("t-1")
        assert await hub.join(topic, "u-2")
        assert await hub.join(topic, "u-1")
        assert not await hub.join(topic, "u-1")
        assert hub.present(topic) == ["u-1", "u-2"]

        assert await hub.leave(topic, "u-2")
        assert not await hub.leave(topic, "u-2")
        assert hub.present(topic) == ["u-1"]

        types = [e.type for e in hub.recent(topic)]
        assert types == [
            MessageType.PRESENCE_JOINED,
            MessageType.PRESENCE_JOINED,
            MessageType.PRESENCE_LEFT,
        ]

    @pytest.mark.asyncio
    async def test_recent_is_bounded(self):
        hub = CollaborationHub(recent_limit=3)
        for i in range(5):
            await hub.publish(build_event(MessageType.NOTIFICATION, "ticket:a", {"n": i}))
        assert [e.data["n"] for e in hub.recent("ticket:a")] == [2, 3, 4]
        assert [e.data["n"] for e in hub.recent("ticket:a", limit=1)] == [4]
        assert hub.recent("ticket:a", limit=0) == []
        assert hub.recent("ticket:none") == []
