"""Domain entities - Core value objects."""

from archsim.domain.entities.architecture import (
    Burstiness,
    Component,
    ComponentBehavior,
    ComponentCapacity,
    ComponentScaling,
    ComponentType,
    Edge,
    Position,
    RegionDistribution,
    SimulationInput,
    TrafficProfile,
    VerticalTier,
)
from archsim.domain.entities.failure_injection import (
    BlastRadiusSummary,
    FailureInjectionApplication,
    FailureInjectionProfile,
    FailureMode,
    ImpactedComponent,
)
from archsim.domain.entities.simulation_result import (
    BasicSimulationOutput,
    Bottleneck,
    BottleneckSeverity,
    EventSeverity,
    SimulationComputationResult,
    SimulationMetrics,
    TimelineEvent,
)
from archsim.domain.entities.topology_warning import TopologyWarning, WarningCode
from archsim.domain.entities.traffic_presets import (
    DEFAULT_TRAFFIC_PROFILE,
    TRAFFIC_PROFILE_PRESETS,
)

__all__ = [
    # Architecture
    "Component",
    "ComponentType",
    "ComponentCapacity",
    "ComponentScaling",
    "ComponentBehavior",
    "VerticalTier",
    "Position",
    "Edge",
    "TrafficProfile",
    "RegionDistribution",
    "Burstiness",
    "SimulationInput",
    # Results
    "SimulationMetrics",
    "Bottleneck",
    "BottleneckSeverity",
    "TimelineEvent",
    "EventSeverity",
    "SimulationComputationResult",
    "BasicSimulationOutput",
    # Failure injection
    "FailureMode",
    "FailureInjectionProfile",
    "FailureInjectionApplication",
    "ImpactedComponent",
    "BlastRadiusSummary",
    # Topology
    "TopologyWarning",
    "WarningCode",
    # Presets
    "TRAFFIC_PROFILE_PRESETS",
    "DEFAULT_TRAFFIC_PROFILE",
]
