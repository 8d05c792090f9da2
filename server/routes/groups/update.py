"""
Update group endpoint.
"""

from fastapi import APIRouter, HTTPException

from core import Group, InvalidOperationError, NotFoundError, update_group

from ...requests import UpdateGroupRequest


router = APIRouter()


@router.patch("/group/{groupID}")
async def update_group_route(groupID: int, request: UpdateGroupRequest) -> Group:
    """Rename a group."""
    try:
        return update_group(groupID, name=request.name)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Group not found")
    except InvalidOperationError as e:
        raise HTTPException(status_code=400, detail=str(e))
