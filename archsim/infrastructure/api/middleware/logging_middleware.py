"""Logging middleware for structured request/response logging.

Logs all HTTP requests with correlation IDs, duration, and status codes.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from archsim.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log HTTP requests and responses.

    Logs:
    - Request method and path
    - Response status code and duration
    - Correlation ID set by the error handler
    - Client IP address
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        start_time = time.perf_counter()

        method = request.method
        path = request.url.path
        client_ip = get_client_ip(request)
        correlation_id = getattr(request.state, "correlation_id", None)

        logger.info(
            "HTTP request received",
            method=method,
            path=path,
            client_ip=client_ip,
            correlation_id=correlation_id,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "HTTP request failed",
                method=method,
                path=path,
                duration_ms=round(duration_ms, 2),
                client_ip=client_ip,
                correlation_id=correlation_id,
                error=str(e),
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "HTTP request completed",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
            client_ip=client_ip,
            correlation_id=correlation_id,
        )

        return response


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request.

    Checks X-Forwarded-For header first (for proxy/load balancer),
    falls back to direct client address.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        # First IP in the chain is the original client
        return forwarded_for.split(",")[0].strip()

    if request.client:
        return request.client.host

    return "unknown"
