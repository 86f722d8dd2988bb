"""
LinguaCorp API — Request Logging Middleware
============================================

What:  One access log line per HTTP request.
How:   Measures time around call_next and logs method, path, status, duration,
       request id and client IP. Level follows the status class.

What we log vs what we DON'T log:
    ✅ method, path, status, duration, IP, request ID
    ❌ request bodies, the X-API-KEY header
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from linguacorp.middleware.request_id import request_id_var

logger = logging.getLogger("linguacorp.access")


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Writes one line per request to the `linguacorp.access` logger.

    Levels:
        5xx → ERROR
        4xx → WARNING (includes 401s from bad API keys)
        2xx/3xx → INFO

    /health is skipped; probes hit it every few seconds.
    """

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.log(
            _level_for(response.status_code),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id_var.get(""),
            request.client.host if request.client else "unknown",
        )
        return response
