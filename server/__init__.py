"""
Chatty API server.

HTTP bindings for the chat operations plus SSE and WebSocket subscription
transports on top of the in-process event bus.
"""

from .app import app
from .event_bus import get_event_bus, set_event_bus
from .routes import register_routes
from .state import get_server_config, set_config

# Register all routes with the app
register_routes(app)

__all__ = ["app", "get_event_bus", "set_event_bus", "get_server_config", "set_config"]
