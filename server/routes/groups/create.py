"""
Create group endpoint.
"""

from fastapi import APIRouter, Depends, HTTPException

from core import Group, InvalidOperationError, NotFoundError, User, create_group

from ...auth import acting_user_id, get_current_user
from ...event_bus import get_event_bus
from ...requests import CreateGroupRequest


router = APIRouter()


@router.post("/group")
async def create_group_route(
    request: CreateGroupRequest,
    user: User | None = Depends(get_current_user),
) -> Group:
    """Create a group with the creator and any of their friends."""
    try:
        return await create_group(
            name=request.name,
            user_id=acting_user_id(user, request.userId),
            event_bus=get_event_bus(),
            user_ids=request.userIds,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidOperationError as e:
        raise HTTPException(status_code=400, detail=str(e))
