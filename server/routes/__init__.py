"""
Route registration for the Chatty API.
"""

from fastapi import FastAPI

from . import auth, groups, health, messages, subscriptions, users, websocket


def register_routes(app: FastAPI) -> None:
    """Register all routes with the FastAPI application."""
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(subscriptions.router)
    app.include_router(websocket.router)
    groups.register_routes(app)
    messages.register_routes(app)
