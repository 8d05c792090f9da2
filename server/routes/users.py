"""User endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from core import (
    Group,
    InvalidOperationError,
    NotFoundError,
    User,
    add_friend,
    create_user,
    find_user,
    get_user,
    list_friends,
    list_user_groups,
    update_user,
)

from ..auth import acting_user_id, get_current_user
from ..requests import AddFriendRequest, CreateUserRequest, UpdateUserRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/user")
async def create_user_route(request: CreateUserRequest) -> User:
    """Register a new user."""
    try:
        return create_user(email=request.email, username=request.username)
    except InvalidOperationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/user")
async def find_user_route(
    email: str | None = Query(None), id: int | None = Query(None)
) -> User:
    """Find a user by email or id."""
    try:
        return find_user(email=email, user_id=id)
    except InvalidOperationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")


@router.get("/user/{userID}")
async def get_user_route(userID: int) -> User:
    """Get user details."""
    try:
        return get_user(userID)
    except NotFoundError:
        logger.debug("User not found: %s", userID)
        raise HTTPException(status_code=404, detail="User not found")


@router.get("/user/{userID}/groups")
async def list_user_groups_route(userID: int) -> list[Group]:
    """List the groups a user belongs to."""
    try:
        return list_user_groups(userID)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")


@router.get("/user/{userID}/friends")
async def list_friends_route(userID: int) -> list[User]:
    """List a user's friends."""
    try:
        return list_friends(userID)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")


@router.post("/user/{userID}/friends")
async def add_friend_route(
    userID: int,
    request: AddFriendRequest,
    user: User | None = Depends(get_current_user),
) -> list[User]:
    """Befriend another user. Friendship is mutual."""
    user_id = acting_user_id(user, userID)
    try:
        return add_friend(user_id, request.friendID)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidOperationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/user/{userID}")
async def update_user_route(
    userID: int,
    request: UpdateUserRequest,
    user: User | None = Depends(get_current_user),
) -> User:
    """Change a user's name or password. A new password revokes older tokens."""
    user_id = acting_user_id(user, userID)
    try:
        return update_user(user_id, username=request.username, password=request.password)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except InvalidOperationError as e:
        raise HTTPException(status_code=400, detail=str(e))
