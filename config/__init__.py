"""
Configuration module for the chat backend.

Exports the configuration models and loader functions.
"""

from .loader import get_config, load_config, load_config_file, merge_configs, strip_jsonc_comments
from .main_config import AuthConfig, ClientConfig, Config, PubSubConfig, ServerConfig

__all__ = [
    # Config models
    "Config",
    "PubSubConfig",
    "ServerConfig",
    "AuthConfig",
    "ClientConfig",
    # Loader functions
    "load_config",
    "get_config",
    "load_config_file",
    "merge_configs",
    "strip_jsonc_comments",
]
