"""
Chat server entry point.
"""
import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import get_config
from core import PubSub
from core.seed import seed_demo_data
from server import app, set_config, set_event_bus
from server.logging_config import log_timing, setup_logging

# Initialize logging before anything else
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the event bus and optional demo data; close subscriptions on shutdown."""
    config = get_config()
    set_config(config)

    bus = PubSub(max_queue_size=config.pubsub.max_queue_size)
    set_event_bus(bus)
    logger.info("Event bus ready (self-exclusion: %s)", config.pubsub.exclude_self)
    logger.info("Access tokens %s", "required" if config.auth.required else "optional")

    seed = os.environ.get("SEED_DEMO_DATA", str(config.seed_demo_data)).lower() == "true"
    if seed:
        with log_timing(logger, "Seeding demo data", logging.INFO):
            seed_demo_data()

    yield

    logger.info("Shutting down, closing %d subscriptions", bus.subscriber_count())
    set_event_bus(None)


app.router.lifespan_context = lifespan


def main() -> None:
    """Start the chat server."""
    config = get_config()
    host = os.environ.get("HOST", config.server.host)
    port = int(os.environ.get("PORT", str(config.server.port)))

    logger.info("Server listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
