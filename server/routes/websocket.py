"""
Multiplexed subscriptions over a WebSocket.

Protocol (JSON text frames):

    client: {"type": "connection_init", "payload": {"authToken": "<jwt>"}}
    server: {"type": "connection_ack"}    or {"type": "connection_error", "payload": {...}}
    client: {"type": "subscribe", "id": "1", "payload": {"name": "messageAdded", "variables": {...}}}
    server: {"type": "next", "id": "1", "payload": {...}}     (per matching event)
    client: {"type": "complete", "id": "1"}
    server: {"type": "complete", "id": "1"}                   (the server ended it)
    client: {"type": "ping"}
    server: {"type": "pong"}
    server: {"type": "error", "id": "1", "payload": {"message": "..."}}

The auth token is optional unless the server requires authentication.
Client frames are handled in order, so a `pong` confirms every earlier
`subscribe` has been registered. Closing the socket closes every
subscription opened on it.
"""

import asyncio
import json
import logging
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from core import AuthenticationError, CoreError, Subscription, User

from ..auth import user_from_token
from .subscriptions import open_subscription

logger = logging.getLogger(__name__)


router = APIRouter()


class SubscriptionSession:
    """The subscriptions of one WebSocket connection."""

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket
        self.user: User | None = None
        self.subscriptions: dict[str, Subscription] = {}
        self.tasks: dict[str, asyncio.Task[None]] = {}
        self._send_lock = asyncio.Lock()

    async def send(self, message: dict[str, Any]) -> None:
        async with self._send_lock:
            await self.websocket.send_json(message)

    async def error(self, operation_id: str | None, message: str) -> None:
        await self.send({"type": "error", "id": operation_id, "payload": {"message": message}})

    async def handle(self, message: dict[str, Any]) -> None:
        kind = message.get("type")
        operation_id = message.get("id")
        if operation_id is not None and not isinstance(operation_id, str):
            await self.error(None, "Operation ids must be strings")
            return

        if kind == "connection_init":
            await self.init(message.get("payload"))
        elif kind == "ping":
            await self.send({"type": "pong"})
        elif kind == "subscribe":
            await self.start(operation_id, message.get("payload"))
        elif kind == "complete":
            await self.stop(operation_id)
        else:
            await self.error(operation_id, f"Unknown message type: {kind}")

    async def init(self, payload: Any) -> None:
        token = payload.get("authToken") if isinstance(payload, dict) else None
        try:
            self.user = user_from_token(token)
        except AuthenticationError as e:
            await self.send({"type": "connection_error", "payload": {"message": str(e)}})
            return
        await self.send({"type": "connection_ack"})

    async def start(self, operation_id: str | None, payload: Any) -> None:
        if not operation_id:
            await self.error(None, "Subscribe requires an id")
            return
        if operation_id in self.subscriptions:
            await self.error(operation_id, f"Subscription {operation_id} already exists")
            return
        if not isinstance(payload, dict):
            await self.error(operation_id, "Subscribe payload must be an object")
            return

        name = payload.get("name")
        variables = payload.get("variables")
        if not isinstance(name, str):
            await self.error(operation_id, "Subscribe payload requires a subscription name")
            return
        if variables is not None and not isinstance(variables, dict):
            await self.error(operation_id, "Subscription variables must be an object")
            return

        try:
            subscription = open_subscription(name, variables, self.user)
        except CoreError as e:
            await self.error(operation_id, str(e))
            return

        self.subscriptions[operation_id] = subscription
        self.tasks[operation_id] = asyncio.create_task(self.forward(operation_id, subscription))

    async def forward(self, operation_id: str, subscription: Subscription) -> None:
        try:
            async for event in subscription:
                await self.send({"type": "next", "id": operation_id, "payload": event})
            # The bus closed the subscription; stop() cancels before this point
            await self.send({"type": "complete", "id": operation_id})
        except (WebSocketDisconnect, RuntimeError):
            # Socket went away mid-send; the receive loop cleans up
            logger.debug("Dropping event for closed socket (operation %s)", operation_id)
        finally:
            subscription.close()
            if self.subscriptions.get(operation_id) is subscription:
                del self.subscriptions[operation_id]
                self.tasks.pop(operation_id, None)

    async def stop(self, operation_id: str | None) -> None:
        subscription = self.subscriptions.pop(operation_id, None) if operation_id else None
        if subscription is None:
            return
        subscription.close()
        task = self.tasks.pop(operation_id)
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def close(self) -> None:
        for operation_id in list(self.subscriptions):
            await self.stop(operation_id)


@router.websocket("/subscriptions")
async def subscriptions_socket(websocket: WebSocket) -> None:
    """Serve subscriptions until the client disconnects."""
    await websocket.accept()
    session = SubscriptionSession(websocket)
    logger.info("Subscription socket opened")
    try:
        while True:
            try:
                message = json.loads(await websocket.receive_text())
            except ValueError:
                await session.error(None, "Messages must be valid JSON")
                continue
            if not isinstance(message, dict):
                await session.error(None, "Messages must be JSON objects")
                continue
            await session.handle(message)
    except WebSocketDisconnect:
        logger.info("Subscription socket closed (%d active)", len(session.subscriptions))
    finally:
        await session.close()
