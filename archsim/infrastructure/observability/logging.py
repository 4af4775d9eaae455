"""structlog setup for the archsim API.

Request logs from the middleware and the stdlib loggers used by the
simulation engine and use cases end up on stdout in one format, tagged with
the active trace and the service name.
"""

import logging
import sys
from typing import Any

import structlog
from opentelemetry import trace

from archsim.infrastructure.config import get_settings


def configure_logging() -> None:
    """Install the processor chain.

    JSON output is the default for deployed environments; set
    ``OTEL_LOG_JSON_FORMAT=false`` for the console renderer while developing.
    The level applies to stdlib loggers as well, so ``DEBUG`` also surfaces
    the engine's per-run summaries.
    """
    settings = get_settings()
    otel_config = settings.observability
    level = getattr(logging, otel_config.log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    processors: list = [
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_trace_context,
        _add_service_context,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if otel_config.log_json_format:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def _add_trace_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Attach trace_id/span_id when a simulation span is active.

    Lets a slow or failing run in the logs be looked up in the trace backend.
    """
    span = trace.get_current_span()
    if span:
        span_context = span.get_span_context()
        if span_context.is_valid:
            event_dict["trace_id"] = format(span_context.trace_id, "032x")
            event_dict["span_id"] = format(span_context.span_id, "016x")

    return event_dict


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Tag every event with the service name and environment."""
    settings = get_settings()
    event_dict.setdefault("service", settings.observability.service_name)
    event_dict.setdefault("environment", settings.environment)
    return event_dict


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger, e.g. ``get_logger(__name__).info("run", saturated=True)``."""
    return structlog.get_logger(name)
