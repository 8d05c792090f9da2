"""
Tests for the in-process event bus.
"""

import asyncio

import pytest

from core import PubSub, with_filter


async def drain(subscription) -> list:
    """Collect everything currently buffered without blocking."""
    items = []
    while subscription.pending():
        items.append(await subscription.__anext__())
    return items


class TestPublish:
    """Tests for publish/subscribe fan-out."""

    @pytest.mark.asyncio
    async def test_publish_without_subscribers(self, bus):
        """Publishing to an empty topic is not an error."""
        delivered = await bus.publish("message-added", {"id": 1})
        assert delivered == 0

    @pytest.mark.asyncio
    async def test_fan_out_to_all_subscribers(self, bus):
        """Every subscriber on the topic receives the payload."""
        first = bus.subscribe("message-added")
        second = bus.subscribe("message-added")

        delivered = await bus.publish("message-added", {"id": 1})

        assert delivered == 2
        assert await first.__anext__() == {"id": 1}
        assert await second.__anext__() == {"id": 1}

    @pytest.mark.asyncio
    async def test_topics_are_isolated(self, bus):
        """Subscribers only see their own topic."""
        messages = bus.subscribe("message-added")
        groups = bus.subscribe("group-added")

        await bus.publish("group-added", {"id": 7})

        assert messages.pending() == 0
        assert await drain(groups) == [{"id": 7}]

    @pytest.mark.asyncio
    async def test_only_events_after_subscribe(self, bus):
        """Events published before subscribing are not delivered."""
        await bus.publish("message-added", {"id": 1})
        subscription = bus.subscribe("message-added")
        await bus.publish("message-added", {"id": 2})

        assert await drain(subscription) == [{"id": 2}]

    @pytest.mark.asyncio
    async def test_order_preserved_per_topic(self, bus):
        """A subscriber receives events in publish order."""
        subscription = bus.subscribe("message-added")
        for i in range(50):
            await bus.publish("message-added", {"id": i})

        received = [item["id"] for item in await drain(subscription)]
        assert received == list(range(50))

    @pytest.mark.asyncio
    async def test_multiple_topics_on_one_subscription(self, bus):
        """A subscription can listen to several topics."""
        subscription = bus.subscribe(["message-added", "group-added"])
        await bus.publish("message-added", {"id": 1})
        await bus.publish("group-added", {"id": 2})

        assert await drain(subscription) == [{"id": 1}, {"id": 2}]
        assert bus.subscriber_count() == 1

    def test_subscribe_requires_topic(self, bus):
        """An empty topic list is rejected."""
        with pytest.raises(ValueError):
            bus.subscribe([])

    @pytest.mark.asyncio
    async def test_consumer_wakes_on_publish(self, bus):
        """A consumer waiting on the stream is woken by a publish."""
        subscription = bus.subscribe("message-added")

        async def consume():
            async for payload in subscription:
                return payload

        task = asyncio.create_task(consume())
        await asyncio.sleep(0)
        await bus.publish("message-added", {"id": 42})

        assert await asyncio.wait_for(task, timeout=1) == {"id": 42}

    @pytest.mark.asyncio
    async def test_instances_are_independent(self):
        """Two buses never share subscribers."""
        one, two = PubSub(), PubSub()
        subscription = one.subscribe("message-added")

        await two.publish("message-added", {"id": 1})

        assert subscription.pending() == 0
        assert two.subscriber_count() == 0


class TestFiltering:
    """Tests for predicate evaluation during dispatch."""

    @pytest.mark.asyncio
    async def test_predicate_gates_delivery(self, bus):
        """Non-matching payloads are never buffered."""
        subscription = bus.subscribe(
            "message-added",
            args={"groupIds": [1]},
            predicate=lambda payload, args: payload["groupId"] in args["groupIds"],
        )

        await bus.publish("message-added", {"id": 1, "groupId": 2})
        await bus.publish("message-added", {"id": 2, "groupId": 1})

        assert await drain(subscription) == [{"id": 2, "groupId": 1}]

    @pytest.mark.asyncio
    async def test_raising_predicate_only_affects_its_subscriber(self, bus):
        """A failing filter counts as no match and does not stop dispatch."""

        def broken(payload, args):
            raise KeyError("groupId")

        faulty = bus.subscribe("message-added", predicate=broken)
        healthy = bus.subscribe("message-added")

        delivered = await bus.publish("message-added", {"id": 1})

        assert delivered == 1
        assert faulty.pending() == 0
        assert await drain(healthy) == [{"id": 1}]

    @pytest.mark.asyncio
    async def test_with_filter_factory(self, bus):
        """with_filter installs the predicate and derives the topic from args."""
        subscribe_to_group = with_filter(
            lambda args: f"group-{args['groupId']}",
            lambda payload, args: payload["userId"] != args["userId"],
        )
        subscription = subscribe_to_group(bus, {"groupId": 5, "userId": 1})

        await bus.publish("group-5", {"userId": 1, "text": "mine"})
        await bus.publish("group-5", {"userId": 2, "text": "theirs"})
        await bus.publish("group-6", {"userId": 2, "text": "elsewhere"})

        assert subscription.topics == ("group-5",)
        assert await drain(subscription) == [{"userId": 2, "text": "theirs"}]


class TestCancellation:
    """Tests for closing subscriptions."""

    @pytest.mark.asyncio
    async def test_close_stops_iteration(self, bus):
        """A closed subscription ends its iteration."""
        subscription = bus.subscribe("message-added")
        subscription.close()

        received = [payload async for payload in subscription]
        assert received == []

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self, bus):
        """Closing twice is harmless."""
        subscription = bus.subscribe("message-added")
        subscription.close()
        subscription.close()
        await subscription.aclose()

        assert subscription.closed
        assert bus.subscriber_count() == 0

    @pytest.mark.asyncio
    async def test_no_delivery_after_close(self, bus):
        """Nothing is delivered once a subscription is closed."""
        subscription = bus.subscribe("message-added")
        subscription.close()

        delivered = await bus.publish("message-added", {"id": 1})

        assert delivered == 0
        assert [payload async for payload in subscription] == []

    @pytest.mark.asyncio
    async def test_close_discards_buffered_events(self, bus):
        """Buffered but unconsumed events are dropped on close."""
        subscription = bus.subscribe("message-added")
        await bus.publish("message-added", {"id": 1})

        subscription.close()

        assert [payload async for payload in subscription] == []

    @pytest.mark.asyncio
    async def test_close_wakes_waiting_consumer(self, bus):
        """A consumer blocked on the stream finishes when it is closed."""
        subscription = bus.subscribe("message-added")

        async def consume():
            return [payload async for payload in subscription]

        task = asyncio.create_task(consume())
        await asyncio.sleep(0)
        subscription.close()

        assert await asyncio.wait_for(task, timeout=1) == []

    @pytest.mark.asyncio
    async def test_close_during_dispatch(self, bus):
        """A subscriber closed by an earlier subscriber's filter is skipped."""
        registered = {}

        def close_victim(payload, args):
            registered["victim"].close()
            return True

        bus.subscribe("message-added", predicate=close_victim)
        registered["victim"] = victim = bus.subscribe("message-added")

        delivered = await bus.publish("message-added", {"id": 1})

        assert delivered == 1
        assert [payload async for payload in victim] == []

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, bus):
        """Leaving the async context closes the subscription."""
        async with bus.subscribe("message-added") as subscription:
            assert bus.subscriber_count("message-added") == 1

        assert subscription.closed
        assert bus.topics() == []

    @pytest.mark.asyncio
    async def test_registry_released(self, bus):
        """Closed subscriptions leave nothing behind in the registry."""
        subscriptions = [bus.subscribe("message-added") for _ in range(100)]
        for subscription in subscriptions:
            subscription.close()

        assert bus.subscriber_count() == 0
        assert bus.topics() == []

    @pytest.mark.asyncio
    async def test_bus_close(self, bus):
        """Closing the bus closes every subscription."""
        first = bus.subscribe("message-added")
        second = bus.subscribe(["message-added", "group-added"])

        bus.close()

        assert first.closed and second.closed
        assert bus.subscriber_count() == 0

    @pytest.mark.asyncio
    async def test_not_restartable(self, bus):
        """A finished subscription stays finished."""
        subscription = bus.subscribe("message-added")
        subscription.close()
        assert [p async for p in subscription] == []

        await bus.publish("message-added", {"id": 1})
        assert [p async for p in subscription] == []


class TestBoundedQueues:
    """Tests for per-subscriber queue limits."""

    @pytest.mark.asyncio
    async def test_full_queue_drops_events(self):
        """Events beyond the bound are dropped for that subscriber only."""
        bus = PubSub(max_queue_size=2)
        slow = bus.subscribe("message-added")

        for i in range(3):
            await bus.publish("message-added", {"id": i})

        assert [item["id"] for item in await drain(slow)] == [0, 1]
        bus.close()

    @pytest.mark.asyncio
    async def test_close_with_full_queue(self):
        """Closing a full bounded subscription still ends iteration."""
        bus = PubSub(max_queue_size=1)
        subscription = bus.subscribe("message-added")
        await bus.publish("message-added", {"id": 1})

        subscription.close()

        assert [p async for p in subscription] == []
