"""
LinguaCorp API — Health Check Route
====================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Asks the phrase store for a lightweight health check (SELECT 1 on the
       database store, always true for the in-memory store).
Who:   Docker health checks, load balancers. No API key required.

Status levels:
    - healthy:   phrase store reachable (HTTP 200)
    - unhealthy: phrase store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response, status

from linguacorp import __version__
from linguacorp.dependencies import get_phrase_service
from linguacorp.schemas.phrase import HealthResponse
from linguacorp.services.phrase_base import PhraseService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Phrase store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    service: PhraseService = Depends(get_phrase_service),
) -> HealthResponse:
    store_status = "available"
    overall = "healthy"

    if not await service.health_check():
        store_status = "unavailable"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: phrase store unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        store=store_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
