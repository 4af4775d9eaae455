"""Architecture entity module.

This module defines the value objects that describe a sketched architecture:
typed components, directed edges, and the traffic profile applied to them.

All value objects are frozen dataclasses. A failure-injected input is always
built from fresh instances, so it can never alias the caller's input.
"""

from dataclasses import dataclass, field
from enum import Enum


class ComponentType(str, Enum):
    """Closed set of component kinds that can appear in a topology."""

    CLIENT = "client"
    LOAD_BALANCER = "load-balancer"
    API_GATEWAY = "api-gateway"
    SERVICE = "service"
    CACHE = "cache"
    DATABASE = "database"
    QUEUE = "queue"
    CDN = "cdn"
    OBJECT_STORE = "object-store"


class VerticalTier(str, Enum):
    """Coarse instance-size classification."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XLARGE = "xlarge"


class Burstiness(str, Enum):
    """Traffic shape applied on top of the peak multiplier."""

    STEADY = "steady"
    SPIKY = "spiky"
    EXTREME = "extreme"


@dataclass(frozen=True)
class Position:
    """Canvas position of a component.

    Only used as a deterministic proxy for availability-zone membership.
    """

    x: float
    y: float


@dataclass(frozen=True)
class ComponentCapacity:
    """Declared hardware capacity of a single replica.

    Attributes:
        ops_per_second: Sustained operations per second per replica
        cpu_cores: CPU cores per replica
        memory_gb: Memory per replica in GB
    """

    ops_per_second: float
    cpu_cores: float
    memory_gb: float


@dataclass(frozen=True)
class ComponentScaling:
    """Horizontal and vertical scaling attributes."""

    replicas: int = 1
    vertical_tier: VerticalTier = VerticalTier.MEDIUM


@dataclass(frozen=True)
class ComponentBehavior:
    """Behavioral flags of a component."""

    stateful: bool = False


@dataclass(frozen=True)
class Component:
    """A node in the architecture graph.

    Numeric invariants (positive capacity, replicas >= 1) are enforced by the
    API schema layer; the engine trusts them.

    Attributes:
        id: Identifier unique within the topology
        type: Component kind
        label: Human-readable name used in reports
        position: Canvas position
        capacity: Per-replica capacity
        scaling: Replica count and vertical tier
        behavior: Behavioral flags (statefulness)
    """

    id: str
    type: ComponentType
    label: str
    position: Position
    capacity: ComponentCapacity
    scaling: ComponentScaling = field(default_factory=ComponentScaling)
    behavior: ComponentBehavior = field(default_factory=ComponentBehavior)


@dataclass(frozen=True)
class Edge:
    """A directed dependency between two components."""

    id: str
    source_id: str
    target_id: str


@dataclass(frozen=True)
class RegionDistribution:
    """Share of traffic per region, in percent."""

    us_east: float = 50.0
    us_west: float = 20.0
    europe: float = 20.0
    apac: float = 10.0


@dataclass(frozen=True)
class TrafficProfile:
    """Declared traffic assumptions for a simulation run.

    Attributes:
        baseline_rps: Average requests per second
        peak_multiplier: Peak-to-baseline ratio (>= 1)
        read_percentage: Share of reads in percent
        write_percentage: Share of writes in percent (read + write = 100)
        payload_kb: Average payload size in KB
        region_distribution: Regional traffic split
        burstiness: Traffic shape
    """

    baseline_rps: float
    peak_multiplier: float = 1.0
    read_percentage: float = 80.0
    write_percentage: float = 20.0
    payload_kb: float = 12.0
    region_distribution: RegionDistribution = field(default_factory=RegionDistribution)
    burstiness: Burstiness = Burstiness.STEADY


@dataclass(frozen=True)
class SimulationInput:
    """Immutable bundle consumed by the simulation engine."""

    components: tuple[Component, ...]
    edges: tuple[Edge, ...]
    traffic_profile: TrafficProfile

    def __post_init__(self) -> None:
        # Accept any sequence from callers but always store tuples
        object.__setattr__(self, "components", tuple(self.components))
        object.__setattr__(self, "edges", tuple(self.edges))
