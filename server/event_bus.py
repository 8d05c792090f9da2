"""
Event bus holder for the server layer.

Routes reach the bus through `get_event_bus()`; the application lifespan and
tests can install a fresh instance with `set_event_bus()`.
"""

import logging

from core import PubSub

logger = logging.getLogger(__name__)


_event_bus: PubSub | None = None


def get_event_bus() -> PubSub:
    """Get the server's event bus instance, creating it if necessary."""
    global _event_bus
    if _event_bus is None:
        _event_bus = PubSub()
    return _event_bus


def set_event_bus(bus: PubSub | None) -> None:
    """Replace the server's event bus. The previous bus is closed."""
    global _event_bus
    if _event_bus is not None and _event_bus is not bus:
        _event_bus.close()
    _event_bus = bus
    if bus is not None:
        logger.debug("Event bus installed (max_queue_size=%d)", bus.max_queue_size)
