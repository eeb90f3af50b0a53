"""
MVC Blog - Request Logging Middleware
=====================================

What:  One access log line per HTTP request with status and duration.
When:  Runs inside RequestIDMiddleware, so the line carries the request ID
       through RequestIDLogFilter.

What we log vs what we don't:
    Log:       method, path, status, duration, client IP
    Don't log: form bodies (post content), cookies, auth headers
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("mvcblog.access")


def level_for_status(status: int) -> int:
    """5xx → ERROR, 4xx → WARNING, anything else → INFO."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each request. Health probes are not logged."""

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms from %s",
            request.method,
            path,
            response.status_code,
            duration_ms,
            client_ip,
        )
        return response
