"""AuthPayload model."""

from .user import User


class AuthPayload(User):
    """A user together with a freshly issued access token."""

    jwt: str
