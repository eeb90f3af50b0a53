"""
MVC Blog - Request ID Middleware
================================

What:  Assigns a correlation ID to each request and returns it in X-Request-ID.
How:   Reuses a client-supplied X-Request-ID or generates a short UUID, stores
       it in a ContextVar for the exception handlers and the error page, and
       echoes it on the response.

Log correlation:
    RequestIDLogFilter copies the ContextVar onto every log record, so the
    `%(request_id)s` field of the root handler's format tags service and
    access lines alike. Records emitted outside a request show "-".
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDLogFilter(logging.Filter):
    """Stamps each record with the current request ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that assigns a unique ID to each request for tracing."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough to correlate log lines
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
