"""
Send message endpoint.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from core import ForbiddenError, Message, NotFoundError, User, create_message

from ...auth import acting_user_id, get_current_user
from ...event_bus import get_event_bus
from ...requests import CreateMessageRequest

logger = logging.getLogger(__name__)


router = APIRouter()


@router.post("/message")
async def send_message_route(
    request: CreateMessageRequest,
    user: User | None = Depends(get_current_user),
) -> Message:
    """Send a message to a group and notify subscribed members."""
    user_id = acting_user_id(user, request.userId)
    try:
        return await create_message(
            text=request.text,
            user_id=user_id,
            group_id=request.groupId,
            event_bus=get_event_bus(),
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ForbiddenError as e:
        logger.warning("Rejected message from user %s: %s", user_id, e)
        raise HTTPException(status_code=403, detail=str(e))
