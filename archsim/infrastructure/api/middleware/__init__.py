"""API middleware components.

This module contains middleware for rate limiting, error handling,
request logging and metrics.
"""

from .error_handler import ErrorHandlerMiddleware
from .logging_middleware import LoggingMiddleware
from .metrics_middleware import MetricsMiddleware
from .rate_limit import RateLimitMiddleware

__all__ = [
    "ErrorHandlerMiddleware",
    "LoggingMiddleware",
    "MetricsMiddleware",
    "RateLimitMiddleware",
]
