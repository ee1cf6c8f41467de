"""
Request Context Middleware.

Gives each request an id (X-Request-ID, taken from the caller or minted
here), binds id, method and path into the structlog context so every log
line of the request carries them, and reports the handling time in
X-Response-Time.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from cardbox.backend.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
RESPONSE_TIME_HEADER = "X-Response-Time"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Handlers read the id back from request.state.request_id."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed = int((time.perf_counter() - started) * 1000)
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[RESPONSE_TIME_HEADER] = f"{elapsed}ms"
            logger.debug(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": elapsed},
            )
            return response
        except Exception as exc:
            logger.error("Request failed", extra={"error_type": type(exc).__name__})
            raise
        finally:
            structlog.contextvars.clear_contextvars()
