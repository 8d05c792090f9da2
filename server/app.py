"""
FastAPI application for the chat backend.

Routes map the core errors they expect themselves. Any core error that
escapes a route still gets its status from `CORE_ERROR_STATUS` instead of
a bare 500.
"""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import get_config
from core import (
    AuthenticationError,
    CoreError,
    ForbiddenError,
    InvalidOperationError,
    NotFoundError,
)
from server.middleware import REQUEST_ID_HEADER, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


API_TITLE = "Chatty API"
API_VERSION = "1.0.0"

CORE_ERROR_STATUS: dict[type[CoreError], int] = {
    NotFoundError: 404,
    ForbiddenError: 403,
    AuthenticationError: 401,
    InvalidOperationError: 400,
}


def parse_cors_origins(value: str | None, configured: list[str]) -> list[str]:
    """CORS_ORIGINS (comma-separated) wins over the configured origins."""
    if not value:
        return configured
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def status_for(error: CoreError) -> int:
    for error_type in type(error).__mro__:
        if error_type in CORE_ERROR_STATUS:
            return CORE_ERROR_STATUS[error_type]
    return 500


async def core_error_handler(request: Request, exc: CoreError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("Unhandled core error on %s: %s", request.url.path, exc)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse({"detail": str(exc)}, status_code=status_code, headers=headers)


app = FastAPI(title=API_TITLE, version=API_VERSION)
app.add_exception_handler(CoreError, core_error_handler)

# Keep the origin list explicit outside local development, e.g.
# CORS_ORIGINS="https://chatty.example.com,https://admin.chatty.example.com"
cors_origins = parse_cors_origins(os.environ.get("CORS_ORIGINS"), get_config().server.cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials="*" not in cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)

# Added after CORS so it wraps it and sees every response
app.add_middleware(RequestLoggingMiddleware)
