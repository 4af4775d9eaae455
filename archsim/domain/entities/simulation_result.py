"""Domain entities for simulation results.

Defines the metrics, bottlenecks and timeline events produced by a single
simulation run.
"""

from dataclasses import dataclass, field
from enum import Enum

from archsim.domain.entities.architecture import ComponentType


class BottleneckSeverity(str, Enum):
    """Severity of a component under pressure."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class EventSeverity(str, Enum):
    """Severity of a timeline event."""

    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True)
class SimulationMetrics:
    """System-wide metrics of a simulation run.

    Attributes:
        peak_rps: Burst-adjusted peak demand in requests per second
        capacity_rps: System-wide throughput ceiling
        throughput_rps: Served throughput, never above peak_rps
        p50_latency_ms: Estimated median latency
        p95_latency_ms: Estimated 95th percentile latency
        error_rate_percent: Estimated error rate in [0, 100]
        saturated: Whether demand exceeds the capacity ceiling
    """

    peak_rps: float
    capacity_rps: float
    throughput_rps: float
    p50_latency_ms: float
    p95_latency_ms: float
    error_rate_percent: float
    saturated: bool


@dataclass(frozen=True)
class Bottleneck:
    """A component at or above 80% modeled utilization."""

    component_id: str
    component_label: str
    component_type: ComponentType
    utilization_percent: float
    required_rps: float
    capacity_rps: float
    severity: BottleneckSeverity
    reason: str


@dataclass(frozen=True)
class TimelineEvent:
    """One entry of the human-readable run narrative."""

    sequence: int
    at_second: int
    severity: EventSeverity
    title: str
    description: str
    component_id: str | None = None


@dataclass(frozen=True)
class SimulationComputationResult:
    """Complete output of run_architecture_simulation."""

    metrics: SimulationMetrics
    bottlenecks: list[Bottleneck] = field(default_factory=list)
    timeline: list[TimelineEvent] = field(default_factory=list)


@dataclass(frozen=True)
class BasicSimulationOutput:
    """Output of the single-tier replica model."""

    throughput: float
    saturated: bool
