"""
Event topics and EventBus protocol.

The EventBus is an abstract interface that core uses to publish events.
`core.pubsub.PubSub` is the in-process implementation the server uses.
"""

from typing import Any, Protocol


MESSAGE_ADDED_TOPIC = "message-added"
GROUP_ADDED_TOPIC = "group-added"


class EventBus(Protocol):
    """Abstract interface for publishing events."""

    async def publish(self, topic: str, payload: dict[str, Any]) -> int:
        """Publish a payload to every matching subscriber of a topic."""
        ...


class NullEventBus:
    """No-op EventBus implementation for testing."""

    async def publish(self, topic: str, payload: dict[str, Any]) -> int:
        """Discard the event."""
        return 0
