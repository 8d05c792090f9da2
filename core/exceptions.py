"""
Core domain exceptions.

These exceptions are transport-agnostic and should be caught by the server
layer to convert into appropriate HTTP responses.
"""


class CoreError(Exception):
    """Base exception for all core errors."""

    pass


class NotFoundError(CoreError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str | int):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ForbiddenError(CoreError):
    """Raised when a user acts on a resource they do not belong to."""

    pass


class InvalidOperationError(CoreError):
    """Raised when an operation cannot be performed in the current state."""

    pass


class AuthenticationError(CoreError):
    """Raised when credentials or an access token are missing or invalid."""

    pass
