"""
Blog API — Request Logging Middleware
=======================================

What:  One access-log line per request: method, path, status, duration,
       request ID and client IP.
How:   Times the downstream call and picks the log level from the status.

Log levels:
    5xx          → ERROR
    4xx          → WARNING
    /api/* 2xx   → INFO
    static files → DEBUG (the page and its script are fetched on every load)

Request bodies are never logged here.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from blog_api.middleware.request_id import request_id_var

logger = logging.getLogger("blog_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request after the response has been produced."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # request.client is None under some test transports
        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        elif path.startswith("/api"):
            log_level = logging.INFO
        else:
            log_level = logging.DEBUG

        rid = request_id_var.get("") or getattr(request.state, "request_id", "")
        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
