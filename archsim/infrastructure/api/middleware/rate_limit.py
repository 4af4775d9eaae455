"""Rate limiting middleware using token bucket algorithm.

Implements per-client rate limiting with a tighter limit for the simulation
endpoints, which do the actual computation. Buckets are held in memory.
"""

import time
from collections import defaultdict
from dataclasses import dataclass, field

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from archsim.infrastructure.api.middleware.logging_middleware import get_client_ip
from archsim.infrastructure.api.schemas.error_schema import ProblemDetails
from archsim.infrastructure.config import get_settings
from archsim.infrastructure.observability.metrics import record_rate_limit_exceeded

WINDOW_SECONDS = 60

SIMULATION_PATH_PREFIX = "/api/v1/simulations"

# Exclude probes and docs from rate limiting
EXCLUDED_PATHS = {
    "/api/v1/health",
    "/api/v1/metrics",
    "/docs",
    "/redoc",
    "/openapi.json",
}


@dataclass
class TokenBucket:
    """Token bucket for rate limiting."""

    capacity: int
    refill_rate: float  # tokens per second
    tokens: float = field(init=False)
    last_refill: float = field(init=False)

    def __post_init__(self) -> None:
        self.tokens = float(self.capacity)
        self.last_refill = time.monotonic()

    def consume(self, tokens: int = 1) -> bool:
        """Attempt to consume tokens from bucket.

        Args:
            tokens: Number of tokens to consume

        Returns:
            True if tokens were consumed, False if insufficient tokens
        """
        self._refill()

        if self.tokens >= tokens:
            self.tokens -= tokens
            return True
        return False

    def _refill(self) -> None:
        now = time.monotonic()
        elapsed = now - self.last_refill
        self.tokens = min(self.capacity, self.tokens + elapsed * self.refill_rate)
        self.last_refill = now

    def time_until_available(self, tokens: int = 1) -> float:
        """Seconds until requested tokens are available (0 if already available)."""
        self._refill()
        if self.tokens >= tokens:
            return 0.0
        return (tokens - self.tokens) / self.refill_rate


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware for rate limiting API requests.

    Uses token bucket algorithm with per-client tracking. Limits come from
    RateLimitSettings and are expressed in requests per minute.
    """

    def __init__(self, app):
        super().__init__(app)
        self.settings = get_settings().rate_limit
        # client_id -> endpoint_pattern -> TokenBucket
        self.buckets: dict[str, dict[str, TokenBucket]] = defaultdict(dict)

    async def dispatch(self, request: Request, call_next):
        if not self.settings.enabled or request.url.path in EXCLUDED_PATHS:
            return await call_next(request)

        client_id = get_client_ip(request)
        endpoint_pattern, requests_per_window = self._get_limit(request)

        if endpoint_pattern not in self.buckets[client_id]:
            self.buckets[client_id][endpoint_pattern] = TokenBucket(
                capacity=requests_per_window,
                refill_rate=requests_per_window / WINDOW_SECONDS,
            )

        bucket = self.buckets[client_id][endpoint_pattern]

        if not bucket.consume():
            record_rate_limit_exceeded(endpoint_pattern)
            retry_after = int(bucket.time_until_available()) + 1
            problem = ProblemDetails(
                type="https://httpstatuses.com/429",
                title="Too Many Requests",
                status=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=f"Rate limit exceeded. Try again in {retry_after} seconds.",
                instance=request.url.path,
                correlation_id=getattr(request.state, "correlation_id", None),
                retry_after_seconds=retry_after,
            )
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=problem.model_dump(exclude_none=True),
                media_type="application/problem+json",
                headers={
                    "X-RateLimit-Limit": str(requests_per_window),
                    "X-RateLimit-Remaining": "0",
                    "Retry-After": str(retry_after),
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(requests_per_window)
        response.headers["X-RateLimit-Remaining"] = str(int(bucket.tokens))

        return response

    def _get_limit(self, request: Request) -> tuple[str, int]:
        """Determine the endpoint pattern and its per-minute limit."""
        if request.url.path.startswith(SIMULATION_PATH_PREFIX):
            return "simulations", self.settings.simulation
        return "default", self.settings.default
