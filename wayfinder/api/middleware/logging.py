"""Request logging, metrics and request-id propagation."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from wayfinder.utils.monitoring import observe_request

logger = logging.getLogger("wayfinder.api")

REQUEST_ID_HEADER = "X-Request-Id"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id, then log and time it.

    The id is taken from the inbound header when present so audit entries can be
    correlated with an upstream gateway.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        # Route templates keep metric cardinality bounded for /api/people/{person_id}.
        route = request.scope.get("route")
        observe_request(request.method, getattr(route, "path", request.url.path), response.status_code, elapsed)
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.info(
            "request.completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(elapsed * 1000, 2),
            },
        )
        return response
