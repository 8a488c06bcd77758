"""Liveness Probe — answers 200 whenever the process is up.

Invariants:
    - GET /api/v1/health/ never runs test groups (that is the `healthcheck` command)
"""

from fastapi import APIRouter, status

from evaluation_base import __version__
from evaluation_base.config import get_settings

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": get_settings().service_name,
        "version": __version__,
    }
