"""Prometheus metrics instrumentation.

Defines and exports Prometheus metrics for monitoring the application.
Avoids high cardinality by omitting component ids from labels.
"""

from prometheus_client import Counter, Histogram
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

# HTTP Request Metrics
http_requests_total = Counter(
    name="archsim_http_requests_total",
    documentation="Total number of HTTP requests",
    labelnames=["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    name="archsim_http_request_duration_seconds",
    documentation="HTTP request duration in seconds",
    labelnames=["method", "endpoint", "status_code"],
    buckets=(
        0.005,  # 5ms
        0.01,  # 10ms
        0.025,  # 25ms
        0.05,  # 50ms
        0.1,  # 100ms
        0.25,  # 250ms
        0.5,  # 500ms
        1.0,  # 1s
        2.5,  # 2.5s
    ),
)

# Simulation Metrics
simulation_runs_total = Counter(
    name="archsim_simulation_runs_total",
    documentation="Total number of simulation runs",
    labelnames=["outcome"],  # healthy, saturated, empty
)

simulation_duration_seconds = Histogram(
    name="archsim_simulation_duration_seconds",
    documentation="Simulation computation duration in seconds",
    labelnames=["kind"],  # baseline, failure_injection
    buckets=(
        0.0001,  # 0.1ms
        0.0005,  # 0.5ms
        0.001,  # 1ms
        0.005,  # 5ms
        0.01,  # 10ms
        0.05,  # 50ms
        0.1,  # 100ms
        0.5,  # 500ms
    ),
)

simulation_bottlenecks_total = Counter(
    name="archsim_simulation_bottlenecks_total",
    documentation="Total number of bottlenecks detected",
    labelnames=["severity"],
)

failure_injections_total = Counter(
    name="archsim_failure_injections_total",
    documentation="Total number of failure injections",
    labelnames=["mode"],
)

# Rate Limiting Metrics
rate_limit_exceeded_total = Counter(
    name="archsim_rate_limit_exceeded_total",
    documentation="Total number of requests rejected due to rate limiting",
    labelnames=["endpoint"],
)


def get_metrics_content() -> tuple[bytes, str]:
    """Generate Prometheus metrics in exposition format.

    Returns:
        Tuple of (metrics_bytes, content_type)
    """
    return generate_latest(), CONTENT_TYPE_LATEST


def record_http_request(
    method: str,
    endpoint: str,
    status_code: int,
    duration: float,
) -> None:
    """Record HTTP request metrics.

    Args:
        method: HTTP method (GET, POST, etc.)
        endpoint: API endpoint path
        status_code: HTTP status code
        duration: Request duration in seconds
    """
    http_requests_total.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()

    http_request_duration_seconds.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).observe(duration)


def record_simulation_run(
    outcome: str,
    kind: str,
    duration: float,
    bottleneck_severities: list[str],
) -> None:
    """Record simulation run metrics.

    Args:
        outcome: healthy, saturated or empty
        kind: baseline or failure_injection
        duration: Computation duration in seconds
        bottleneck_severities: Severity of every bottleneck detected
    """
    simulation_runs_total.labels(outcome=outcome).inc()
    simulation_duration_seconds.labels(kind=kind).observe(duration)
    for severity in bottleneck_severities:
        simulation_bottlenecks_total.labels(severity=severity).inc()


def record_failure_injection(mode: str) -> None:
    """Record a failure injection.

    Args:
        mode: Failure mode (node-down, az-down, dependency-lag, traffic-surge)
    """
    failure_injections_total.labels(mode=mode).inc()


def record_rate_limit_exceeded(endpoint: str) -> None:
    """Record rate limit exceeded event.

    Args:
        endpoint: Endpoint that was rate limited
    """
    rate_limit_exceeded_total.labels(endpoint=endpoint).inc()
