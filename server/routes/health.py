"""
Health check endpoint.
"""

from fastapi import APIRouter

from ..event_bus import get_event_bus


router = APIRouter()


@router.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    bus = get_event_bus()
    return {
        "status": "ok",
        "subscribers": bus.subscriber_count(),
        "topics": bus.topics(),
    }
