"""
Server-side state management.

Holds the active configuration for the server layer.
Chat records are managed in core/state.py.
"""

from config import Config, get_config


# =============================================================================
# Config Management
# =============================================================================

_config: Config | None = None


def set_config(config: Config | None) -> None:
    """Set the active configuration. Called by the application lifespan."""
    global _config
    _config = config


def get_server_config() -> Config:
    """Get the active configuration, falling back to the loaded config files."""
    return _config if _config is not None else get_config()
