"""
Message operations.

Creating a message publishes a `message-added` event once the message is
stored. Group history is paginated newest first with opaque cursors.
"""

import base64
import binascii
import logging
import time

from .events import MESSAGE_ADDED_TOPIC, EventBus
from .exceptions import ForbiddenError, InvalidOperationError
from .groups import get_group
from .models import Message, MessageConnection, MessageEdge, PageInfo
from .state import messages, next_id
from .users import get_user

logger = logging.getLogger(__name__)


async def create_message(
    text: str,
    user_id: int,
    group_id: int,
    event_bus: EventBus,
) -> Message:
    """
    Send a message to a group.

    Args:
        text: Message body
        user_id: Author
        group_id: Target group
        event_bus: EventBus for publishing the message-added event

    Returns:
        The stored message

    Raises:
        NotFoundError: If the user or group does not exist
        ForbiddenError: If the author is not a member of the group
    """
    get_user(user_id)
    group = get_group(group_id)
    if user_id not in group.userIds:
        raise ForbiddenError(f"User {user_id} is not a member of group {group_id}")

    message = Message(
        id=next_id("message"),
        userId=user_id,
        groupId=group_id,
        text=text,
        createdAt=time.time(),
    )
    messages[message.id] = message
    logger.debug("Message %s stored for group %s", message.id, group_id)

    await event_bus.publish(MESSAGE_ADDED_TOPIC, message.model_dump())
    return message


def list_messages(group_id: int | None = None, user_id: int | None = None) -> list[Message]:
    """List messages, optionally filtered by group and author, newest first."""
    result = [
        message
        for message in messages.values()
        if (group_id is None or message.groupId == group_id)
        and (user_id is None or message.userId == user_id)
    ]
    return sorted(result, key=lambda m: (m.createdAt, m.id), reverse=True)


def encode_cursor(message_id: int) -> str:
    return base64.b64encode(str(message_id).encode()).decode()


def decode_cursor(cursor: str) -> int:
    try:
        return int(base64.b64decode(cursor.encode(), validate=True).decode())
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise InvalidOperationError(f"Invalid cursor: {cursor}") from e


def get_group_messages(
    group_id: int,
    first: int | None = None,
    after: str | None = None,
    last: int | None = None,
    before: str | None = None,
) -> MessageConnection:
    """
    Page through a group's messages, newest first.

    Because the list runs newest to oldest, `before` selects newer messages
    (id > cursor) and `after` selects older ones (id < cursor).
    """
    get_group(group_id)
    limit = first or last
    if limit is not None and limit < 0:
        raise InvalidOperationError("Page size cannot be negative")

    history = sorted(
        (m for m in messages.values() if m.groupId == group_id),
        key=lambda m: m.id,
        reverse=True,
    )

    cursor_id: int | None = None
    if before:
        cursor_id = decode_cursor(before)
        window = [m for m in history if m.id > cursor_id]
    elif after:
        cursor_id = decode_cursor(after)
        window = [m for m in history if m.id < cursor_id]
    else:
        window = history

    if limit is None:
        page = window
    elif before:
        # The messages just newer than the cursor, still newest first
        page = window[-limit:] if limit else []
    else:
        page = window[:limit]

    if not page or limit is None or len(page) < limit:
        has_next = False
    elif before:
        has_next = any(m.id > page[0].id for m in history)
    else:
        has_next = any(m.id < page[-1].id for m in history)

    if cursor_id is None:
        has_previous = False
    elif before:
        has_previous = any(m.id <= cursor_id for m in history)
    else:
        has_previous = any(m.id >= cursor_id for m in history)

    return MessageConnection(
        edges=[MessageEdge(cursor=encode_cursor(m.id), node=m) for m in page],
        pageInfo=PageInfo(hasNextPage=has_next, hasPreviousPage=has_previous),
    )
