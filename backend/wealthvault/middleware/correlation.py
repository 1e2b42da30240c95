# backend/wealthvault/middleware/correlation.py
"""
Request tracing middleware.

Every request gets a correlation ID, taken from the first of:
1. X-Correlation-ID header
2. X-Request-ID header
3. A freshly generated UUID4

Client-supplied IDs are trimmed and capped at MAX_CORRELATION_ID_LENGTH
so a hostile header cannot flood the logs. The ID is bound to the log
context for the whole request, echoed back in X-Correlation-ID, and
each request is logged once on completion with its status and duration.
"""

import logging
import time
import uuid
from typing import Awaitable, Callable

from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from wealthvault.utils.context import correlation_scope

logger = logging.getLogger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"
MAX_CORRELATION_ID_LENGTH = 128


def resolve_correlation_id(headers: Headers) -> str:
    """Pick the incoming trace ID, or generate one."""
    for header in (CORRELATION_ID_HEADER, REQUEST_ID_HEADER):
        value = (headers.get(header) or "").strip()
        if value:
            return value[:MAX_CORRELATION_ID_LENGTH]
    return str(uuid.uuid4())


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Binds a correlation ID to each request and logs its outcome."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        correlation_id = resolve_correlation_id(request.headers)
        started = time.perf_counter()

        with correlation_scope(correlation_id):
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code} "
                f"in {elapsed_ms:.1f}ms"
            )

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response
