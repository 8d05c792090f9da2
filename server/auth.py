"""
Bearer token authentication for the API.

Requests may carry `Authorization: Bearer <jwt>`. With a token the caller
acts as the token's user; without one the caller names its `userId`, unless
`auth.required` is set in the config.
"""

import logging
import os
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core import AuthenticationError, ForbiddenError, User, authenticate, resolve_actor

from .state import get_server_config

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

_generated_secret: str | None = None


def get_jwt_secret() -> str:
    """The token signing secret: JWT_SECRET, then the config, then a per-process one."""
    global _generated_secret
    secret = os.environ.get("JWT_SECRET") or get_server_config().auth.jwt_secret
    if secret:
        return secret
    if _generated_secret is None:
        logger.warning("No JWT secret configured; tokens will not survive a restart")
        _generated_secret = secrets.token_urlsafe(32)
    return _generated_secret


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def user_from_token(token: str | None) -> User | None:
    """
    Resolve an optional token.

    Raises:
        AuthenticationError: If a token is given but invalid
    """
    if not token:
        return None
    return authenticate(token, get_jwt_secret())


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> User | None:
    """The authenticated user, or None when the request carries no token."""
    try:
        return user_from_token(credentials.credentials if credentials else None)
    except AuthenticationError as e:
        raise unauthorized(str(e))


def acting_user_id(user: User | None, claimed_id: int | None) -> int:
    """
    The user a mutation acts as.

    Raises:
        HTTPException: 401 without a usable identity, 403 when the claimed
            id is not the token's user
    """
    try:
        actor = resolve_actor(user, claimed_id, required=get_server_config().auth.required)
    except AuthenticationError as e:
        raise unauthorized(str(e))
    except ForbiddenError as e:
        raise HTTPException(status_code=403, detail=str(e))
    if actor is None:
        raise unauthorized("A userId or an access token is required")
    return actor
