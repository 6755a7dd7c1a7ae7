"""
Health Check Router
==================
Endpoint for liveness checks.
"""
import time
from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()

STARTED_AT = time.monotonic()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns OK with the current time and process uptime in seconds.
    """
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
    }
