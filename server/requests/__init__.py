"""
HTTP request models for the API.

These are Pydantic models for validating and parsing API requests.
"""

from .add_friend_request import AddFriendRequest
from .create_group_request import CreateGroupRequest
from .create_message_request import CreateMessageRequest
from .create_user_request import CreateUserRequest
from .leave_group_request import LeaveGroupRequest
from .login_request import LoginRequest
from .signup_request import SignupRequest
from .update_group_request import UpdateGroupRequest
from .update_user_request import UpdateUserRequest

__all__ = [
    # Auth requests
    "SignupRequest",
    "LoginRequest",
    # User requests
    "CreateUserRequest",
    "UpdateUserRequest",
    "AddFriendRequest",
    # Group requests
    "CreateGroupRequest",
    "UpdateGroupRequest",
    "LeaveGroupRequest",
    # Message requests
    "CreateMessageRequest",
]
