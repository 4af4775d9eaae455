"""Metrics middleware for recording HTTP request metrics."""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from archsim.infrastructure.observability.metrics import record_http_request


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to record HTTP request count and duration.

    Labels: method, endpoint, status_code. The endpoint label uses the
    matched route template so that unknown paths collapse into one series.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        start_time = time.perf_counter()

        response = await call_next(request)

        duration = time.perf_counter() - start_time
        record_http_request(
            method=request.method,
            endpoint=self._normalize_endpoint(request),
            status_code=response.status_code,
            duration=duration,
        )

        return response

    def _normalize_endpoint(self, request: Request) -> str:
        route = request.scope.get("route")
        if route is not None and hasattr(route, "path"):
            return route.path
        return "unmatched"
