"""
News Archive API — Health Check Route
=======================================

What:  Liveness/readiness probe reporting MongoDB connectivity.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   MongoDB answered a ping
    - unhealthy: MongoDB unreachable, or the client was never created
"""

import logging
import time

from fastapi import APIRouter, Request

from app import __version__
from app.database import ping
from app.schemas.article import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the service and its MongoDB connection.",
)
async def health_check(request: Request) -> HealthResponse:
    client = getattr(request.app.state, "mongo_client", None)
    connected = client is not None and await ping(client)
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
