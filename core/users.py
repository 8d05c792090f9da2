"""
User operations.

Provides user lookup, creation and updates, friendships, and group
membership queries.
"""

import logging

from .exceptions import InvalidOperationError, NotFoundError
from .models import Group, User
from .passwords import set_password
from .state import friendships, groups, next_id, users

logger = logging.getLogger(__name__)


def create_user(email: str, username: str | None = None, password: str | None = None) -> User:
    """
    Create a new user.

    A user created without a password cannot log in until one is set with
    `update_user`.

    Raises:
        InvalidOperationError: If the email is already registered or the
            password is too short
    """
    normalized = email.strip().lower()
    if any(user.email == normalized for user in users.values()):
        raise InvalidOperationError(f"Email already registered: {normalized}")

    user_id = next_id("user")
    if password is not None:
        set_password(user_id, password)

    user = User(id=user_id, email=normalized, username=username)
    users[user.id] = user
    friendships[user.id] = set()
    logger.info("User created: %s", user.id)
    return user


def update_user(
    user_id: int, username: str | None = None, password: str | None = None
) -> User:
    """
    Change a user's display name and/or password.

    Setting a password invalidates every access token issued before.
    """
    user = get_user(user_id)
    if username is not None and not username.strip():
        raise InvalidOperationError("Username cannot be empty")

    if password is not None:
        set_password(user_id, password)
        logger.info("Password changed for user %s", user_id)
    if username is not None:
        user.username = username
    return user


def get_user(user_id: int) -> User:
    """
    Get a user by ID.

    Raises:
        NotFoundError: If the user is not found
    """
    if user_id not in users:
        raise NotFoundError("User", user_id)
    return users[user_id]


def find_user(email: str | None = None, user_id: int | None = None) -> User:
    """Find a user by email or id; both must agree when both are given."""
    if email is None and user_id is None:
        raise InvalidOperationError("Either email or id is required")

    normalized = email.strip().lower() if email is not None else None
    for user in users.values():
        if user_id is not None and user.id != user_id:
            continue
        if normalized is not None and user.email != normalized:
            continue
        return user
    raise NotFoundError("User", normalized if normalized is not None else user_id)


def add_friend(user_id: int, friend_id: int) -> list[User]:
    """
    Make two users friends with each other.

    Returns:
        The user's friends after the change
    """
    if user_id == friend_id:
        raise InvalidOperationError("A user cannot befriend themselves")
    get_user(user_id)
    get_user(friend_id)

    friendships.setdefault(user_id, set()).add(friend_id)
    friendships.setdefault(friend_id, set()).add(user_id)
    logger.debug("Users %s and %s are now friends", user_id, friend_id)
    return list_friends(user_id)


def list_friends(user_id: int) -> list[User]:
    get_user(user_id)
    return [users[friend_id] for friend_id in sorted(friendships.get(user_id, ()))]


def list_user_groups(user_id: int) -> list[Group]:
    """Groups the user is a member of, oldest first."""
    get_user(user_id)
    return [group for group in groups.values() if user_id in group.userIds]
