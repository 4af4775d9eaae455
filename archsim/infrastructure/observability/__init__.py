"""Observability infrastructure module.

Provides OpenTelemetry tracing, structured logging, and Prometheus metrics.
"""

from archsim.infrastructure.observability.logging import configure_logging, get_logger
from archsim.infrastructure.observability.metrics import (
    get_metrics_content,
    record_failure_injection,
    record_http_request,
    record_rate_limit_exceeded,
    record_simulation_run,
)
from archsim.infrastructure.observability.tracing import (
    get_tracer,
    instrument_fastapi_app,
    setup_tracing,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Tracing
    "setup_tracing",
    "instrument_fastapi_app",
    "get_tracer",
    # Metrics
    "get_metrics_content",
    "record_http_request",
    "record_simulation_run",
    "record_failure_injection",
    "record_rate_limit_exceeded",
]
