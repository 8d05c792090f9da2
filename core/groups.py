"""
Group operations.

Creating a group publishes a `group-added` event once the group is stored.
"""

import logging
import time

from .events import GROUP_ADDED_TOPIC, EventBus
from .exceptions import ForbiddenError, InvalidOperationError, NotFoundError
from .models import Group
from .state import friendships, groups, messages, next_id
from .users import get_user

logger = logging.getLogger(__name__)


async def create_group(
    name: str,
    user_id: int,
    event_bus: EventBus,
    user_ids: list[int] | None = None,
) -> Group:
    """
    Create a group owned by `user_id`.

    Only users among `user_ids` who are friends of the creator are added;
    other ids are ignored. The creator is always the first member.

    Args:
        name: Group name
        user_id: Creator of the group
        event_bus: EventBus for publishing the group-added event
        user_ids: Users to invite

    Returns:
        The created group
    """
    if not name.strip():
        raise InvalidOperationError("Group name cannot be empty")
    get_user(user_id)

    friends = friendships.get(user_id, set())
    invited: list[int] = []
    for candidate in user_ids or []:
        if candidate in friends and candidate not in invited:
            invited.append(candidate)
        elif candidate != user_id:
            logger.debug("Skipping non-friend %s for group of user %s", candidate, user_id)

    group = Group(
        id=next_id("group"),
        name=name,
        ownerId=user_id,
        userIds=[user_id, *invited],
        createdAt=time.time(),
    )
    groups[group.id] = group
    logger.info("Group created: %s with %d members", group.id, len(group.userIds))

    await event_bus.publish(GROUP_ADDED_TOPIC, group.model_dump())
    return group


def get_group(group_id: int) -> Group:
    """
    Get a group by ID.

    Raises:
        NotFoundError: If the group is not found
    """
    if group_id not in groups:
        raise NotFoundError("Group", group_id)
    return groups[group_id]


def update_group(group_id: int, name: str | None = None) -> Group:
    group = get_group(group_id)
    if name is not None:
        if not name.strip():
            raise InvalidOperationError("Group name cannot be empty")
        group.name = name
        logger.info("Group renamed: %s", group_id)
    return group


def delete_group(group_id: int) -> Group:
    """Delete a group together with all of its messages."""
    group = groups.pop(group_id, None)
    if group is None:
        raise NotFoundError("Group", group_id)

    stale = [message_id for message_id, message in messages.items() if message.groupId == group_id]
    for message_id in stale:
        del messages[message_id]
    logger.info("Group deleted: %s (%d messages removed)", group_id, len(stale))
    return group


def leave_group(group_id: int, user_id: int) -> Group:
    """
    Remove a user from a group. The group is deleted when its last member leaves.

    Returns:
        The group as it is after the user left
    """
    group = get_group(group_id)
    if user_id not in group.userIds:
        raise ForbiddenError(f"User {user_id} is not a member of group {group_id}")

    group.userIds = [member for member in group.userIds if member != user_id]
    logger.info("User %s left group %s", user_id, group_id)

    if not group.userIds:
        delete_group(group_id)
    return group


def require_membership(user_id: int | None, group_ids: list[int]) -> None:
    """
    Check that a user belongs to every listed group.

    Unknown groups are reported like groups the user is not in.

    Raises:
        ForbiddenError: If any group does not have the user as a member
    """
    if not group_ids:
        return
    if user_id is None:
        raise ForbiddenError("A userId is required to follow group messages")
    for group_id in group_ids:
        group = groups.get(group_id)
        if group is None or user_id not in group.userIds:
            raise ForbiddenError(f"User {user_id} is not a member of group {group_id}")
