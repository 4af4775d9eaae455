"""Domain entities for failure injection and blast radius analysis.

This module defines the failure scenarios that can be applied to a
simulation input and the impact report derived from the re-run.
"""

from dataclasses import dataclass, field
from enum import Enum

from archsim.domain.entities.architecture import ComponentType, SimulationInput
from archsim.domain.entities.simulation_result import BottleneckSeverity


class FailureMode(str, Enum):
    """Supported failure scenarios."""

    NODE_DOWN = "node-down"
    AZ_DOWN = "az-down"
    DEPENDENCY_LAG = "dependency-lag"
    TRAFFIC_SURGE = "traffic-surge"


@dataclass(frozen=True)
class FailureInjectionProfile:
    """A failure scenario and its mode-specific parameters.

    Attributes:
        mode: Which failure to inject
        target_component_id: Target for node-down and dependency-lag
        az_name: Zone for az-down ("az-a" or "az-b")
        lag_ms: Added latency for dependency-lag (defaults to 250)
        surge_multiplier: Traffic multiplier for traffic-surge (defaults to 2)
    """

    mode: FailureMode
    target_component_id: str | None = None
    az_name: str | None = None
    lag_ms: float | None = None
    surge_multiplier: float | None = None


@dataclass(frozen=True)
class FailureInjectionApplication:
    """Result of applying a failure profile to a simulation input."""

    input: SimulationInput
    impacted_component_ids: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ImpactedComponent:
    """A component pushed into high or critical pressure by a failure."""

    component_id: str
    component_label: str
    component_type: ComponentType
    severity: BottleneckSeverity
    reason: str


@dataclass(frozen=True)
class BlastRadiusSummary:
    """Impact report for a failure-injected run.

    Attributes:
        mode: Failure mode that was injected
        impacted_components: Up to six high/critical components
        impacted_count: Number of impacted components reported
        critical_count: How many of them are critical
        estimated_user_impact_percent: Share of users affected, in [0, 100]
        summary: One-line human-readable summary
    """

    mode: FailureMode
    impacted_components: list[ImpactedComponent] = field(default_factory=list)
    impacted_count: int = 0
    critical_count: int = 0
    estimated_user_impact_percent: float = 0.0
    summary: str = ""
