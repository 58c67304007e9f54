"""
Blog API — Request ID Middleware
==================================

What:  Gives every request a short correlation ID and echoes it back.
Why:   Lets a log line from the service layer be matched to the access log
       line and to the response the browser received.
How:   Reuses an incoming X-Request-ID header or generates one, stores it in
       a ContextVar and on request.state, and sets it on the response.

Unexpected errors:
    Exceptions no FastAPI handler claims are turned into a 500 here, not in
    Starlette's ServerErrorMiddleware, so that response still carries the
    request ID. Body shape matches the other errors: {"error": str(exc)}.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns a request ID before any other processing (outermost app middleware)."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are plenty for correlating log lines
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                str(exc),
                exc_info=True,
            )
            response = JSONResponse(status_code=500, content={"error": str(exc)})
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
