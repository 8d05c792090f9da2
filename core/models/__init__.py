"""
Domain models for the chat backend.

These are the core data structures used throughout the application.
"""

from .auth_payload import AuthPayload
from .credentials import Credentials
from .group import Group
from .message import Message
from .message_connection import MessageConnection, MessageEdge, PageInfo
from .subscription_args import GroupAddedArgs, MessageAddedArgs
from .user import User

__all__ = [
    "User",
    "Group",
    "Message",
    # Authentication
    "AuthPayload",
    "Credentials",
    # Pagination
    "MessageConnection",
    "MessageEdge",
    "PageInfo",
    # Subscription arguments
    "MessageAddedArgs",
    "GroupAddedArgs",
]
