"""
RecipeBook Backend — Health Check Route
=========================================

What:  Liveness endpoint for monitoring and load balancer health checks.
How:   Reports the process state without calling Firebase.

    Status levels:
    - healthy:   Firebase App initialized (at least one request has used it)
    - degraded:  Firebase App not yet initialized (cold process or bad config)
"""

import time

from fastapi import APIRouter

from recipebook import __version__, firebase
from recipebook.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])

# Module-level: set once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    initialized = firebase.is_initialized()
    return HealthResponse(
        status="healthy" if initialized else "degraded",
        version=__version__,
        firebase="initialized" if initialized else "not_initialized",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
