"""
Paginated group history endpoint.
"""

from fastapi import APIRouter, HTTPException, Query

from core import InvalidOperationError, MessageConnection, NotFoundError, get_group_messages


router = APIRouter()


@router.get("/group/{groupID}/messages")
async def group_messages_route(
    groupID: int,
    first: int | None = Query(None, ge=0),
    after: str | None = Query(None),
    last: int | None = Query(None, ge=0),
    before: str | None = Query(None),
) -> MessageConnection:
    """Page through a group's messages, newest first."""
    try:
        return get_group_messages(groupID, first=first, after=after, last=last, before=before)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Group not found")
    except InvalidOperationError as e:
        raise HTTPException(status_code=400, detail=str(e))
