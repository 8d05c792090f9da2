"""
Delivery predicates for subscriptions.

Every function here is pure: it looks only at the event payload and the
subscriber's arguments. Self-exclusion is kept separate from membership so
it can be switched per topic.
"""

from typing import Any

from .models import GroupAddedArgs, MessageAddedArgs


def message_in_subscribed_groups(payload: dict[str, Any], args: MessageAddedArgs) -> bool:
    """True when the message was sent to one of the subscriber's groups."""
    if not args.groupIds:
        return False
    return payload.get("groupId") in args.groupIds


def subscriber_in_group(payload: dict[str, Any], args: GroupAddedArgs) -> bool:
    """True when the subscriber is a member of the new group."""
    if args.userId is None:
        return False
    return args.userId in payload.get("userIds", ())


def message_author(payload: dict[str, Any]) -> int | None:
    return payload.get("userId")


def group_creator(payload: dict[str, Any]) -> int | None:
    return payload.get("ownerId")


def is_own_event(actor_id: int | None, subscriber_id: int | None) -> bool:
    """An event is the subscriber's own when both ids are known and equal."""
    return actor_id is not None and subscriber_id is not None and actor_id == subscriber_id

