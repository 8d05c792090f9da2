"""
Leave group endpoint.
"""

from fastapi import APIRouter, Depends, HTTPException

from core import ForbiddenError, Group, NotFoundError, User, leave_group

from ...auth import acting_user_id, get_current_user
from ...requests import LeaveGroupRequest


router = APIRouter()


@router.post("/group/{groupID}/leave")
async def leave_group_route(
    groupID: int,
    request: LeaveGroupRequest,
    user: User | None = Depends(get_current_user),
) -> Group:
    """Leave a group. The last member leaving removes the group."""
    try:
        return leave_group(groupID, acting_user_id(user, request.userId))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Group not found")
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
