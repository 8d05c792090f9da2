"""
Delete group endpoint.
"""

from fastapi import APIRouter, HTTPException

from core import Group, NotFoundError, delete_group


router = APIRouter()


@router.delete("/group/{groupID}")
async def delete_group_route(groupID: int) -> Group:
    """Delete a group and all of its messages."""
    try:
        return delete_group(groupID)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Group not found")
