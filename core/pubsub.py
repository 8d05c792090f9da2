"""
In-process publish/subscribe with per-subscriber filtering.

Each `Subscription` owns an asyncio queue and an optional predicate. The
`PubSub` registry maps topics to live subscriptions; `publish` evaluates
each subscriber's predicate inline and enqueues only matching payloads.

Delivery is at-most-once and best-effort: events are never persisted or
replayed, and a subscriber that is not registered at publish time misses
the event. Clients recover by refetching current state after reconnecting.

All methods must be called from the event loop that owns the bus. `publish`
never suspends, so a dispatch cannot interleave with `subscribe` or `close`.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import Any

logger = logging.getLogger(__name__)


Predicate = Callable[[dict[str, Any], Any], bool]

# Wakes a consumer blocked in __anext__ after close()
_CLOSED = object()


class Subscription:
    """
    A registered interest in one or more topics.

    Iterate it with `async for` to receive payloads in publish order. The
    iteration ends once the subscription is closed and cannot be restarted;
    subscribe again to resume.
    """

    def __init__(
        self,
        bus: "PubSub",
        topics: tuple[str, ...],
        args: Any = None,
        predicate: Predicate | None = None,
        max_queue_size: int = 0,
    ) -> None:
        self.topics = topics
        self.args = args
        self.predicate = predicate
        self._bus = bus
        self._queue: asyncio.Queue[Any] = asyncio.Queue(max_queue_size)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def matches(self, payload: dict[str, Any]) -> bool:
        """Evaluate the predicate; a raising predicate counts as no match."""
        if self.predicate is None:
            return True
        try:
            return bool(self.predicate(payload, self.args))
        except Exception:
            logger.exception(
                "Subscription filter failed on %s, dropping event for this subscriber",
                self.topics,
            )
            return False

    def deliver(self, payload: dict[str, Any]) -> bool:
        """Enqueue a payload. Returns False when the payload was dropped."""
        if self._closed:
            logger.debug("Dropping event for closed subscription on %s", self.topics)
            return False
        try:
            self._queue.put_nowait(payload)
        except asyncio.QueueFull:
            logger.warning(
                "Subscription queue full on %s (size=%d), dropping event",
                self.topics,
                self._queue.maxsize,
            )
            return False
        return True

    def pending(self) -> int:
        """Number of payloads buffered but not yet consumed."""
        return self._queue.qsize()

    def close(self) -> None:
        """
        Stop receiving events. Safe to call more than once.

        The registry entry is removed before returning, buffered payloads are
        discarded and a consumer waiting in `__anext__` is woken up.
        """
        if self._closed:
            return
        self._closed = True
        self._bus._unregister(self)
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_CLOSED)
        logger.debug("Subscription closed on %s", self.topics)

    async def aclose(self) -> None:
        self.close()

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> dict[str, Any]:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            # Keep the sentinel so later calls also stop
            self._queue.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return item

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()


class PubSub:
    """
    Topic-based event bus.

    Instances are fully independent; the registry lives on the instance.
    """

    def __init__(self, max_queue_size: int = 0) -> None:
        self.max_queue_size = max_queue_size
        # Dicts keep registration order so dispatch order is deterministic
        self._subscribers: dict[str, dict[Subscription, None]] = {}

    async def publish(self, topic: str, payload: dict[str, Any]) -> int:
        """
        Fan a payload out to every matching subscriber of `topic`.

        Does not wait for consumers. Publishing with no subscribers is not an
        error; the event is simply dropped.

        Returns:
            The number of subscribers the payload was enqueued for
        """
        subscribers = self._subscribers.get(topic)
        if not subscribers:
            logger.debug("No subscribers for %s, event dropped", topic)
            return 0

        delivered = 0
        for subscription in list(subscribers):
            if subscription.closed:
                continue
            if subscription.matches(payload) and subscription.deliver(payload):
                delivered += 1

        logger.debug(
            "Published %s to %d of %d subscribers", topic, delivered, len(subscribers)
        )
        return delivered

    def subscribe(
        self,
        topics: str | Iterable[str],
        args: Any = None,
        predicate: Predicate | None = None,
    ) -> Subscription:
        """
        Register a new subscription.

        Args:
            topics: A topic name or several topic names
            args: Filter arguments stored on the subscription
            predicate: Called as predicate(payload, args) for every event

        Returns:
            The subscription, already registered
        """
        names = (topics,) if isinstance(topics, str) else tuple(topics)
        if not names:
            raise ValueError("subscribe() requires at least one topic")

        subscription = Subscription(
            self, names, args=args, predicate=predicate, max_queue_size=self.max_queue_size
        )
        for topic in names:
            self._subscribers.setdefault(topic, {})[subscription] = None
        logger.debug("Subscription registered on %s", names)
        return subscription

    def _unregister(self, subscription: Subscription) -> None:
        for topic in subscription.topics:
            subscribers = self._subscribers.get(topic)
            if subscribers is None:
                continue
            subscribers.pop(subscription, None)
            if not subscribers:
                del self._subscribers[topic]

    def subscriber_count(self, topic: str | None = None) -> int:
        """Count live subscriptions, for one topic or across all topics."""
        if topic is not None:
            return len(self._subscribers.get(topic, {}))
        unique: set[Subscription] = set()
        for subscribers in self._subscribers.values():
            unique.update(subscribers)
        return len(unique)

    def topics(self) -> list[str]:
        """Topics that currently have at least one subscriber."""
        return list(self._subscribers)

    def close(self) -> None:
        """Close every live subscription."""
        live: dict[Subscription, None] = {}
        for subscribers in self._subscribers.values():
            live.update(subscribers)
        for subscription in live:
            subscription.close()
        logger.info("Event bus closed %d subscriptions", len(live))


def with_filter(
    topics_fn: Callable[[Any], str | Iterable[str]],
    predicate: Predicate,
) -> Callable[[PubSub, Any], Subscription]:
    """
    Build a filtered subscription factory.

    The returned callable subscribes to the topics `topics_fn(args)` names and
    installs `predicate` so the bus only enqueues payloads for which
    `predicate(payload, args)` is true.

    Example:
        subscribe_messages = with_filter(
            lambda args: MESSAGE_ADDED_TOPIC,
            lambda payload, args: payload["groupId"] in args.groupIds,
        )
        async for message in subscribe_messages(bus, args):
            ...
    """

    def factory(bus: PubSub, args: Any) -> Subscription:
        return bus.subscribe(topics_fn(args), args=args, predicate=predicate)

    return factory
