"""
In-memory state storage.

This module contains the global state for users, groups and messages.
In a production system, this could be replaced with a database-backed implementation.
"""

import itertools

from .models import Credentials, Group, Message, User


# =============================================================================
# Record Storage
# =============================================================================

users: dict[int, User] = {}
groups: dict[int, Group] = {}
messages: dict[int, Message] = {}
friendships: dict[int, set[int]] = {}  # userID -> friend userIDs
credentials: dict[int, Credentials] = {}  # userID -> password hash


# =============================================================================
# ID Generation
# =============================================================================

_ids: dict[str, "itertools.count[int]"] = {}


def next_id(kind: str) -> int:
    """Return the next integer id for a record kind, starting at 1."""
    if kind not in _ids:
        _ids[kind] = itertools.count(1)
    return next(_ids[kind])


def reset_state() -> None:
    """Drop all records and restart id sequences."""
    users.clear()
    groups.clear()
    messages.clear()
    friendships.clear()
    credentials.clear()
    _ids.clear()
