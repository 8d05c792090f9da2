"""
Group route registration.
"""

from fastapi import FastAPI

from . import create, delete, get, leave, messages, update


def register_routes(app: FastAPI) -> None:
    """Register all group routes."""
    app.include_router(create.router)
    app.include_router(get.router)
    app.include_router(update.router)
    app.include_router(delete.router)
    app.include_router(leave.router)
    app.include_router(messages.router)
