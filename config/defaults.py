"""Default configuration values."""

from core.auth import DEFAULT_TOKEN_TTL_SECONDS
from core.events import GROUP_ADDED_TOPIC, MESSAGE_ADDED_TOPIC

# Server
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_CORS_ORIGINS = ("*",)

# Event bus
DEFAULT_MAX_QUEUE_SIZE = 0  # 0 = unbounded per-subscriber queue

# Topics whose events are not pushed back to the user who caused them
DEFAULT_EXCLUDE_SELF = {
    MESSAGE_ADDED_TOPIC: True,
    GROUP_ADDED_TOPIC: True,
}

# Authentication (DEFAULT_TOKEN_TTL_SECONDS comes from core.auth)
DEFAULT_AUTH_REQUIRED = False  # without a token, requests name their acting userId

# Subscription client reconnection
DEFAULT_RECONNECT_DELAY_SECONDS = 1.0
DEFAULT_MAX_RECONNECT_DELAY_SECONDS = 30.0

# Config file locations
CONFIG_FILENAMES = ("chatty.jsonc", "chatty.json")
CONFIG_DIRNAME = ".chatty"
