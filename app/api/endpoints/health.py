"""Liveness probe.

Touches neither the database nor the broker, so it keeps answering while
those are degraded.
"""
from fastapi import APIRouter

from app.schemas.base import Envelope

router = APIRouter(tags=["Health"])


@router.get("/healthCheck", response_model=Envelope)
async def health_check() -> Envelope:
    """Health check endpoint."""
    return Envelope.success(200, "Server is running")
