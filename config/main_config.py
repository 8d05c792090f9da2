"""Main Config model."""

from pydantic import BaseModel, Field

from .defaults import (
    DEFAULT_AUTH_REQUIRED,
    DEFAULT_CORS_ORIGINS,
    DEFAULT_EXCLUDE_SELF,
    DEFAULT_HOST,
    DEFAULT_MAX_QUEUE_SIZE,
    DEFAULT_MAX_RECONNECT_DELAY_SECONDS,
    DEFAULT_PORT,
    DEFAULT_RECONNECT_DELAY_SECONDS,
    DEFAULT_TOKEN_TTL_SECONDS,
)


class PubSubConfig(BaseModel):
    """Event bus settings."""

    max_queue_size: int = Field(
        default=DEFAULT_MAX_QUEUE_SIZE,
        ge=0,
        description="Per-subscriber queue bound; events beyond it are dropped (0 = unbounded)",
    )
    exclude_self: dict[str, bool] = Field(
        default_factory=lambda: dict(DEFAULT_EXCLUDE_SELF),
        description="Topic -> skip delivering events to the user who caused them",
    )


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))


class AuthConfig(BaseModel):
    """Access token settings."""

    jwt_secret: str | None = Field(
        default=None,
        description="HS256 signing secret; JWT_SECRET overrides it. Unset = random per process",
    )
    token_ttl: int = Field(default=DEFAULT_TOKEN_TTL_SECONDS, gt=0)
    required: bool = Field(
        default=DEFAULT_AUTH_REQUIRED,
        description="Reject mutations and subscriptions that carry no access token",
    )


class ClientConfig(BaseModel):
    """Subscription client reconnection settings."""

    reconnect_delay: float = Field(default=DEFAULT_RECONNECT_DELAY_SECONDS, ge=0)
    max_reconnect_delay: float = Field(default=DEFAULT_MAX_RECONNECT_DELAY_SECONDS, ge=0)
    max_reconnects: int | None = Field(
        default=None,
        description="Give up after this many reconnect attempts (None = retry forever)",
    )


class Config(BaseModel):
    """Main configuration model."""

    pubsub: PubSubConfig = Field(default_factory=PubSubConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    client: ClientConfig = Field(default_factory=ClientConfig)
    seed_demo_data: bool = Field(
        default=False,
        description="Populate the in-memory store with demo users, groups and messages",
    )
