"""
Signup, login and access tokens.

Tokens are HS256 JWTs carrying the user id as `sub` and the credential
version as `version`. A token is rejected once the password it was issued
under has changed.
"""

import logging
import time

import jwt

from .exceptions import AuthenticationError, ForbiddenError, NotFoundError
from .models import AuthPayload, User
from .passwords import check_password, credential_version
from .state import users
from .users import create_user, get_user

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
DEFAULT_TOKEN_TTL_SECONDS = 30 * 24 * 60 * 60


def create_token(user_id: int, secret: str, ttl: int = DEFAULT_TOKEN_TTL_SECONDS) -> str:
    """
    Issue an access token for a user with a password.

    Raises:
        AuthenticationError: If the user has no password set
    """
    version = credential_version(user_id)
    if version is None:
        raise AuthenticationError(f"User {user_id} has no password")

    now = int(time.time())
    claims = {"sub": str(user_id), "version": version, "iat": now, "exp": now + ttl}
    return jwt.encode(claims, secret, algorithm=TOKEN_ALGORITHM)


def authenticate(token: str, secret: str) -> User:
    """
    Resolve an access token to its user.

    Raises:
        AuthenticationError: If the token is expired, malformed, signed with
            another secret, or issued before the last password change
    """
    try:
        claims = jwt.decode(token, secret, algorithms=[TOKEN_ALGORITHM])
        user_id = int(claims["sub"])
    except jwt.ExpiredSignatureError as e:
        raise AuthenticationError("Token has expired") from e
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        logger.debug("Rejected token: %s", e)
        raise AuthenticationError("Invalid token") from e

    try:
        user = get_user(user_id)
    except NotFoundError as e:
        raise AuthenticationError("Invalid token") from e

    if claims.get("version") != credential_version(user_id):
        raise AuthenticationError("Token was revoked by a password change")
    return user


def signup(
    email: str,
    password: str,
    secret: str,
    username: str | None = None,
    ttl: int = DEFAULT_TOKEN_TTL_SECONDS,
) -> AuthPayload:
    """Register a user with a password and log them in."""
    user = create_user(email=email, username=username, password=password)
    logger.info("User signed up: %s", user.id)
    return AuthPayload(**user.model_dump(), jwt=create_token(user.id, secret, ttl))


def login(
    email: str,
    password: str,
    secret: str,
    ttl: int = DEFAULT_TOKEN_TTL_SECONDS,
) -> AuthPayload:
    """
    Exchange an email and password for an access token.

    Raises:
        AuthenticationError: If the email is unknown or the password is wrong
    """
    normalized = email.strip().lower()
    user = next((u for u in users.values() if u.email == normalized), None)
    if user is None or not check_password(user.id, password):
        logger.info("Failed login for %s", normalized)
        raise AuthenticationError("Invalid email or password")

    return AuthPayload(**user.model_dump(), jwt=create_token(user.id, secret, ttl))


def resolve_actor(
    user: User | None, claimed_id: int | None, required: bool = False
) -> int | None:
    """
    Decide which user an operation acts as.

    An authenticated user always acts as themselves; a claimed id that
    differs is rejected. Without a token the claimed id is trusted unless
    authentication is required.

    Raises:
        AuthenticationError: If there is no token and one is required
        ForbiddenError: If the claimed id belongs to someone else
    """
    if user is None:
        if required:
            raise AuthenticationError("Authentication required")
        return claimed_id
    if claimed_id is not None and claimed_id != user.id:
        raise ForbiddenError(f"Token does not belong to user {claimed_id}")
    return user.id
