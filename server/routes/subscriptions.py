"""
Subscription SSE endpoints.

Each request opens one filtered subscription on the event bus and streams
matching payloads until the client disconnects. When the server ends the
stream (shutdown), a final `error` event tells the client to reconnect.
"""

import json
import logging
from typing import Any, AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, Query
from sse_starlette.sse import EventSourceResponse
from starlette.background import BackgroundTask

from core import (
    AuthenticationError,
    ForbiddenError,
    InvalidOperationError,
    Subscription,
    User,
    get_subscription_field,
    resolve_actor,
    subscribe,
)

from ..auth import get_current_user, unauthorized
from ..event_bus import get_event_bus
from ..state import get_server_config

logger = logging.getLogger(__name__)


router = APIRouter()

SERVER_CLOSED_MESSAGE = "Subscription closed by the server"


def open_subscription(name: str, variables: Any, user: User | None = None) -> Subscription:
    """
    Open a subscription for a transport.

    The subscriber acts as the token's user when there is one, and must be
    allowed to follow what its arguments name.

    Raises:
        InvalidOperationError: Unknown subscription or invalid arguments
        AuthenticationError: No token while authentication is required
        ForbiddenError: The arguments name another user or a foreign group
    """
    config = get_server_config()
    args = get_subscription_field(name).parse_args(variables)
    user_id = resolve_actor(user, args.userId, required=config.auth.required)
    return subscribe(
        get_event_bus(),
        name,
        {**args.model_dump(), "userId": user_id},
        exclude_self=config.pubsub.exclude_self,
        check_access=True,
    )


def stream_subscription(
    name: str, variables: dict[str, Any], user: User | None = None
) -> EventSourceResponse:
    """Register the subscription now and stream it as server-sent events."""
    try:
        subscription = open_subscription(name, variables, user)
    except InvalidOperationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AuthenticationError as e:
        raise unauthorized(str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))

    async def event_generator() -> AsyncGenerator[dict, None]:
        try:
            async with subscription:
                async for payload in subscription:
                    yield {"event": name, "data": json.dumps(payload)}
            # A client disconnect cancels the loop; getting here means the bus closed it
            yield {"event": "error", "data": json.dumps({"message": SERVER_CLOSED_MESSAGE})}
        finally:
            logger.info("Closed %s stream (args=%s)", name, subscription.args)

    # The background task covers a client that disconnects before streaming starts
    return EventSourceResponse(
        event_generator(), background=BackgroundTask(subscription.aclose)
    )


@router.get("/subscription/messageAdded")
async def message_added_stream(
    userId: int | None = Query(None),
    groupIds: list[int] | None = Query(None),
    user: User | None = Depends(get_current_user),
) -> EventSourceResponse:
    """Stream new messages for groups the user belongs to, excluding their own."""
    return stream_subscription("messageAdded", {"userId": userId, "groupIds": groupIds}, user)


@router.get("/subscription/groupAdded")
async def group_added_stream(
    userId: int | None = Query(None),
    user: User | None = Depends(get_current_user),
) -> EventSourceResponse:
    """Stream groups the user was added to by someone else."""
    return stream_subscription("groupAdded", {"userId": userId}, user)
