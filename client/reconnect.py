"""
Connection state tracking with refetch-on-reconnect.

Subscription events are best-effort: anything published while the client was
disconnected is gone. Views that depend on those events register a refetch
callback, and every RECONNECTING -> CONNECTED transition refetches each of
them exactly once instead of assuming the stream resumed where it stopped.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from core import InvalidOperationError

logger = logging.getLogger(__name__)


Refetch = Callable[[], Awaitable[None] | None]


class ConnectionState(Enum):
    DISCONNECTED = "disconnected"
    RECONNECTING = "reconnecting"
    CONNECTED = "connected"


_TRANSITIONS = {
    ConnectionState.CONNECTED: {ConnectionState.DISCONNECTED},
    ConnectionState.DISCONNECTED: {ConnectionState.RECONNECTING},
    ConnectionState.RECONNECTING: {ConnectionState.CONNECTED, ConnectionState.DISCONNECTED},
}


class ConnectionMonitor:
    """Tracks a subscription connection and refetches views after reconnects."""

    def __init__(self) -> None:
        self.state = ConnectionState.DISCONNECTED
        self.has_connected = False
        self.reconnects = 0
        self._views: dict[str, Refetch] = {}

    def register_view(self, name: str, refetch: Refetch) -> None:
        """Register (or replace) the refetch callback of a view."""
        self._views[name] = refetch

    def unregister_view(self, name: str) -> None:
        self._views.pop(name, None)

    @property
    def views(self) -> list[str]:
        return list(self._views)

    def _can_enter(self, target: ConnectionState) -> bool:
        # The first connection goes straight from DISCONNECTED to CONNECTED
        if (
            not self.has_connected
            and self.state is ConnectionState.DISCONNECTED
            and target is ConnectionState.CONNECTED
        ):
            return True
        return target in _TRANSITIONS[self.state]

    async def transition(self, target: ConnectionState) -> None:
        """
        Move to `target`, refetching every view on a completed reconnect.

        Re-entering the current state is a no-op.

        Raises:
            InvalidOperationError: If the transition is not allowed
        """
        if target is self.state:
            return
        if not self._can_enter(target):
            raise InvalidOperationError(
                f"Invalid connection transition: {self.state.value} -> {target.value}"
            )

        previous = self.state
        self.state = target
        logger.info("Connection %s -> %s", previous.value, target.value)

        if target is ConnectionState.CONNECTED:
            self.has_connected = True
            if previous is ConnectionState.RECONNECTING:
                self.reconnects += 1
                await self._refetch_all()

    async def connected(self) -> None:
        await self.transition(ConnectionState.CONNECTED)

    async def disconnected(self) -> None:
        await self.transition(ConnectionState.DISCONNECTED)

    async def reconnecting(self) -> None:
        await self.transition(ConnectionState.RECONNECTING)

    async def _refetch_all(self) -> None:
        for name, refetch in list(self._views.items()):
            try:
                result = refetch()
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Refetch failed for view %s", name)
