"""
List messages endpoint.
"""

from fastapi import APIRouter, Query

from core import Message, list_messages


router = APIRouter()


@router.get("/messages")
async def list_messages_route(
    groupId: int | None = Query(None),
    userId: int | None = Query(None),
) -> list[Message]:
    """List messages sent to a group and/or by a user, newest first."""
    return list_messages(group_id=groupId, user_id=userId)
