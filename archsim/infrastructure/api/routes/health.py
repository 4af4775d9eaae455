"""
Health check endpoints.

Provides a liveness probe and the Prometheus metrics endpoint.
"""

from fastapi import APIRouter, Response, status

from archsim import __version__
from archsim.infrastructure.config import get_settings
from archsim.infrastructure.observability.metrics import get_metrics_content

router = APIRouter()


@router.get(
    "/health",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    description="Check if the service is alive",
    tags=["Health"],
)
async def liveness() -> dict:
    """
    Liveness probe - check if the process is running.

    The service holds no external connections, so liveness is also readiness.
    """
    return {
        "status": "healthy",
        "service": get_settings().observability.service_name,
        "version": __version__,
    }


@router.get(
    "/metrics",
    status_code=status.HTTP_200_OK,
    summary="Prometheus metrics",
    description="Export Prometheus metrics in exposition format",
    tags=["Observability"],
    response_class=Response,
)
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Metrics include:
    - HTTP request counts and durations
    - Simulation run outcomes, durations and bottleneck severities
    - Failure injections per mode
    - Rate limiting counters
    """
    metrics_bytes, content_type = get_metrics_content()

    return Response(
        content=metrics_bytes,
        media_type=content_type,
    )
