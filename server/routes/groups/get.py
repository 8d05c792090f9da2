"""
Get group endpoint.
"""

import logging

from fastapi import APIRouter, HTTPException

from core import Group, NotFoundError, get_group

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/group/{groupID}")
async def get_group_route(groupID: int) -> Group:
    """Get group details."""
    try:
        return get_group(groupID)
    except NotFoundError:
        logger.debug("Group not found: %s", groupID)
        raise HTTPException(status_code=404, detail="Group not found")
