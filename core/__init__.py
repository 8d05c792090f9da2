"""
Core business logic package.

This package contains transport-agnostic business logic for the chat backend:
the in-process event bus, subscription filtering, and the chat operations
that publish events. The server package provides HTTP bindings around these.
"""

from .auth import authenticate, create_token, login, resolve_actor, signup
from .events import GROUP_ADDED_TOPIC, MESSAGE_ADDED_TOPIC, EventBus, NullEventBus
from .exceptions import (
    AuthenticationError,
    CoreError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
)
from .groups import (
    create_group,
    delete_group,
    get_group,
    leave_group,
    require_membership,
    update_group,
)
from .messages import create_message, get_group_messages, list_messages
from .models import (
    AuthPayload,
    Group,
    GroupAddedArgs,
    Message,
    MessageAddedArgs,
    MessageConnection,
    MessageEdge,
    PageInfo,
    User,
)
from .pubsub import PubSub, Subscription, with_filter
from .subscriptions import SUBSCRIPTION_FIELDS, SubscriptionField, get_subscription_field, subscribe
from .users import (
    add_friend,
    create_user,
    find_user,
    get_user,
    list_friends,
    list_user_groups,
    update_user,
)

__all__ = [
    # Exceptions
    "CoreError",
    "NotFoundError",
    "ForbiddenError",
    "InvalidOperationError",
    "AuthenticationError",
    # Events
    "MESSAGE_ADDED_TOPIC",
    "GROUP_ADDED_TOPIC",
    "EventBus",
    "NullEventBus",
    "PubSub",
    "Subscription",
    "with_filter",
    # Subscriptions
    "SubscriptionField",
    "SUBSCRIPTION_FIELDS",
    "get_subscription_field",
    "subscribe",
    # Models
    "User",
    "AuthPayload",
    "Group",
    "Message",
    "MessageConnection",
    "MessageEdge",
    "PageInfo",
    "MessageAddedArgs",
    "GroupAddedArgs",
    # User operations
    "create_user",
    "get_user",
    "find_user",
    "add_friend",
    "list_friends",
    "list_user_groups",
    "update_user",
    # Authentication
    "signup",
    "login",
    "create_token",
    "authenticate",
    "resolve_actor",
    # Group operations
    "create_group",
    "get_group",
    "update_group",
    "delete_group",
    "leave_group",
    "require_membership",
    # Message operations
    "create_message",
    "list_messages",
    "get_group_messages",
]
