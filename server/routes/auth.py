"""
Signup and login endpoints.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from core import AuthenticationError, AuthPayload, InvalidOperationError, User, login, signup

from ..auth import get_current_user, get_jwt_secret, unauthorized
from ..requests import LoginRequest, SignupRequest
from ..state import get_server_config

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup")
async def signup_route(request: SignupRequest) -> AuthPayload:
    """Register with a password and receive an access token."""
    try:
        return signup(
            email=request.email,
            password=request.password,
            username=request.username,
            secret=get_jwt_secret(),
            ttl=get_server_config().auth.token_ttl,
        )
    except InvalidOperationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/login")
async def login_route(request: LoginRequest) -> AuthPayload:
    """Exchange an email and password for an access token."""
    try:
        return login(
            email=request.email,
            password=request.password,
            secret=get_jwt_secret(),
            ttl=get_server_config().auth.token_ttl,
        )
    except AuthenticationError as e:
        raise unauthorized(str(e))


@router.get("/me")
async def me_route(user: User | None = Depends(get_current_user)) -> User:
    """The user the access token belongs to."""
    if user is None:
        raise unauthorized("Authentication required")
    return user
