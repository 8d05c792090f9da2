"""
SSE subscription client with automatic reconnection.

Streams one subscription endpoint with httpx, hands each payload to a
callback, and drives a `ConnectionMonitor` so registered views are refetched
after every reconnect.
"""

import asyncio
import inspect
import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from config import ClientConfig

from .reconnect import ConnectionMonitor
from .sse import iter_sse

logger = logging.getLogger(__name__)


EventHandler = Callable[[dict[str, Any]], Awaitable[None] | None]

SUBSCRIPTION_PATH = "/subscription/{name}"


class SubscriptionClient:
    """
    Keeps one subscription stream open for as long as `run()` is running.

    Example:
        async with httpx.AsyncClient(base_url="http://localhost:8080", timeout=None) as http:
            client = SubscriptionClient(http, "messageAdded", {"userId": 1, "groupIds": [1, 2]}, on_message)
            client.monitor.register_view("group:1", refetch_group)
            await client.run()
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        name: str,
        variables: dict[str, Any],
        on_event: EventHandler,
        monitor: ConnectionMonitor | None = None,
        config: ClientConfig | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        token: str | None = None,
    ) -> None:
        self.http = http
        self.name = name
        self.variables = {key: value for key, value in variables.items() if value is not None}
        self.on_event = on_event
        self.monitor = monitor or ConnectionMonitor()
        self.config = config or ClientConfig()
        self._sleep = sleep
        self.token = token
        self.attempts = 0

    async def run(self) -> None:
        """
        Stream until cancelled or until `max_reconnects` attempts are used up.

        Raises:
            httpx.HTTPStatusError: On a 4xx response, which retrying cannot fix
        """
        delay = self.config.reconnect_delay
        first = True

        while True:
            if not first:
                if (
                    self.config.max_reconnects is not None
                    and self.attempts >= self.config.max_reconnects
                ):
                    logger.warning(
                        "Giving up on %s after %d reconnect attempts", self.name, self.attempts
                    )
                    return
                await self._sleep(delay)
                delay = min(delay * 2, self.config.max_reconnect_delay)
                self.attempts += 1
                # Until the first connection succeeds there is nothing to refetch
                if self.monitor.has_connected:
                    await self.monitor.reconnecting()
            first = False

            try:
                await self._stream()
                delay = self.config.reconnect_delay
                logger.info("Subscription stream %s ended", self.name)
            except httpx.HTTPStatusError as e:
                await self.monitor.disconnected()
                if e.response.status_code < 500:
                    raise
                logger.warning("Subscription %s failed: %s", self.name, e)
                continue
            except httpx.TransportError as e:
                logger.warning("Subscription %s connection lost: %s", self.name, e)

            await self.monitor.disconnected()

    async def _stream(self) -> None:
        path = SUBSCRIPTION_PATH.format(name=self.name)
        headers = {"Accept": "text/event-stream"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        async with self.http.stream("GET", path, params=self.variables, headers=headers) as response:
            response.raise_for_status()
            await self.monitor.connected()
            async for event in iter_sse(response.aiter_lines()):
                if event.event == "error":
                    logger.warning("Subscription %s reported an error: %s", self.name, event.data)
                    continue
                await self._dispatch(json.loads(event.data))

    async def _dispatch(self, payload: dict[str, Any]) -> None:
        result = self.on_event(payload)
        if inspect.isawaitable(result):
            await result
