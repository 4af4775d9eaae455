"""OpenTelemetry distributed tracing setup.

Configures the OpenTelemetry SDK with an OTLP exporter and instruments the
FastAPI application. Simulation routes open manual spans via get_tracer().
"""

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from archsim import __version__
from archsim.infrastructure.config import get_settings

logger = logging.getLogger(__name__)


def setup_tracing() -> TracerProvider | None:
    """Setup OpenTelemetry tracing with OTLP exporter.

    Configures:
    - TracerProvider with service name and version
    - OTLP exporter for sending traces to collector
    - Trace sampling based on configured sample rate

    Returns:
        TracerProvider instance, or None when tracing is disabled
    """
    settings = get_settings()
    otel_config = settings.observability

    if not otel_config.tracing_enabled:
        logger.info("Tracing disabled; spans will not be exported")
        return None

    resource = Resource.create(
        {
            "service.name": otel_config.service_name,
            "service.version": __version__,
            "deployment.environment": settings.environment,
        }
    )

    sampler = TraceIdRatioBased(otel_config.trace_sample_rate)
    provider = TracerProvider(resource=resource, sampler=sampler)

    exporter = OTLPSpanExporter(endpoint=otel_config.exporter_otlp_endpoint, insecure=True)
    provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(provider)
    logger.info(
        "Tracing configured: endpoint=%s sample_rate=%s",
        otel_config.exporter_otlp_endpoint,
        otel_config.trace_sample_rate,
    )

    return provider


def instrument_fastapi_app(app) -> None:
    """Instrument FastAPI application with OpenTelemetry.

    Must be called after FastAPI app is created.

    Args:
        app: FastAPI application instance
    """
    try:
        FastAPIInstrumentor.instrument_app(app)
        logger.info("FastAPI auto-instrumentation enabled")
    except Exception as e:
        logger.warning(
            "Failed to instrument FastAPI app",
            extra={"error": str(e)},
        )


def get_tracer(name: str):
    """Get OpenTelemetry tracer for manual instrumentation.

    Args:
        name: Tracer name (typically __name__)

    Returns:
        Tracer instance for creating spans

    Example:
        >>> tracer = get_tracer(__name__)
        >>> with tracer.start_as_current_span("simulation.run") as span:
        ...     span.set_attribute("simulation.components", 4)
    """
    return trace.get_tracer(name)
