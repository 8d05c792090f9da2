"""
Client-side subscription support.

Consumes the server's SSE subscription endpoints and refetches dependent
views after a reconnect, since missed events are never replayed.
"""

from .reconnect import ConnectionMonitor, ConnectionState
from .sse import ServerSentEvent, iter_sse
from .subscription_client import SubscriptionClient

__all__ = [
    "ConnectionMonitor",
    "ConnectionState",
    "ServerSentEvent",
    "iter_sse",
    "SubscriptionClient",
]
