"""Pydantic schemas for the simulation API endpoints.

Request models enforce every numeric and structural invariant the engine
trusts (ranges, read/write sum, region sum, mode-specific failure fields) and
convert themselves into domain value objects. Response models are populated
straight from the domain dataclasses.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

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
    FailureInjectionProfile,
    FailureMode,
)
from archsim.domain.entities.simulation_result import (
    BottleneckSeverity,
    EventSeverity,
)
from archsim.domain.entities.topology_warning import WarningCode

PERCENT_SUM_TOLERANCE = 0.001


# ==================== Architecture ====================


class PositionApiModel(BaseModel):
    """Canvas position of a component."""

    model_config = ConfigDict(from_attributes=True)

    x: float = Field(..., ge=0, le=5000, description="Horizontal canvas position")
    y: float = Field(..., ge=0, le=5000, description="Vertical canvas position")


class ComponentCapacityApiModel(BaseModel):
    """Per-replica capacity."""

    model_config = ConfigDict(from_attributes=True)

    ops_per_second: float = Field(..., gt=0, description="Operations per second per replica")
    cpu_cores: float = Field(..., gt=0, description="CPU cores per replica")
    memory_gb: float = Field(..., gt=0, description="Memory per replica (GB)")


class ComponentScalingApiModel(BaseModel):
    """Replica count and vertical tier."""

    model_config = ConfigDict(from_attributes=True)

    replicas: int = Field(default=1, ge=1, description="Number of replicas")
    vertical_tier: VerticalTier = Field(
        default=VerticalTier.MEDIUM, description="Instance size tier"
    )


class ComponentBehaviorApiModel(BaseModel):
    """Behavioral flags."""

    model_config = ConfigDict(from_attributes=True)

    stateful: bool = Field(default=False, description="Whether the component holds state")


class ComponentApiModel(BaseModel):
    """A node of the architecture graph."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., min_length=1, description="Component identifier")
    type: ComponentType = Field(..., description="Component kind")
    label: str = Field(..., min_length=1, max_length=120, description="Display name")
    position: PositionApiModel
    capacity: ComponentCapacityApiModel
    scaling: ComponentScalingApiModel = Field(default_factory=ComponentScalingApiModel)
    behavior: ComponentBehaviorApiModel = Field(default_factory=ComponentBehaviorApiModel)

    def to_domain(self) -> Component:
        return Component(
            id=self.id,
            type=self.type,
            label=self.label,
            position=Position(x=self.position.x, y=self.position.y),
            capacity=ComponentCapacity(
                ops_per_second=self.capacity.ops_per_second,
                cpu_cores=self.capacity.cpu_cores,
                memory_gb=self.capacity.memory_gb,
            ),
            scaling=ComponentScaling(
                replicas=self.scaling.replicas,
                vertical_tier=self.scaling.vertical_tier,
            ),
            behavior=ComponentBehavior(stateful=self.behavior.stateful),
        )


class EdgeApiModel(BaseModel):
    """A directed dependency."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., min_length=1)
    source_id: str = Field(..., min_length=1)
    target_id: str = Field(..., min_length=1)

    def to_domain(self) -> Edge:
        return Edge(id=self.id, source_id=self.source_id, target_id=self.target_id)


class RegionDistributionApiModel(BaseModel):
    """Regional traffic split in percent."""

    model_config = ConfigDict(from_attributes=True)

    us_east: float = Field(..., ge=0, le=100)
    us_west: float = Field(..., ge=0, le=100)
    europe: float = Field(..., ge=0, le=100)
    apac: float = Field(..., ge=0, le=100)


class TrafficProfileApiModel(BaseModel):
    """Traffic assumptions for a run."""

    model_config = ConfigDict(from_attributes=True)

    baseline_rps: int = Field(..., gt=0, le=10_000_000, description="Average requests per second")
    peak_multiplier: float = Field(..., ge=1, le=50, description="Peak-to-baseline ratio")
    read_percentage: float = Field(..., ge=0, le=100)
    write_percentage: float = Field(..., ge=0, le=100)
    payload_kb: float = Field(..., gt=0, le=10_000, description="Average payload size (KB)")
    region_distribution: RegionDistributionApiModel
    burstiness: Burstiness = Field(default=Burstiness.STEADY)

    @model_validator(mode="after")
    def check_percentage_sums(self) -> "TrafficProfileApiModel":
        if abs(self.read_percentage + self.write_percentage - 100) > PERCENT_SUM_TOLERANCE:
            raise ValueError("Read and write percentages must sum to 100.")

        regions = self.region_distribution
        region_total = regions.us_east + regions.us_west + regions.europe + regions.apac
        if abs(region_total - 100) > PERCENT_SUM_TOLERANCE:
            raise ValueError("Region distribution must sum to 100.")
        return self

    def to_domain(self) -> TrafficProfile:
        return TrafficProfile(
            baseline_rps=self.baseline_rps,
            peak_multiplier=self.peak_multiplier,
            read_percentage=self.read_percentage,
            write_percentage=self.write_percentage,
            payload_kb=self.payload_kb,
            region_distribution=RegionDistribution(
                us_east=self.region_distribution.us_east,
                us_west=self.region_distribution.us_west,
                europe=self.region_distribution.europe,
                apac=self.region_distribution.apac,
            ),
            burstiness=self.burstiness,
        )


class SimulationInputApiModel(BaseModel):
    """Request body for a simulation run."""

    components: list[ComponentApiModel] = Field(default_factory=list)
    edges: list[EdgeApiModel] = Field(default_factory=list)
    traffic_profile: TrafficProfileApiModel

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "components": [
                    {
                        "id": "gateway",
                        "type": "api-gateway",
                        "label": "Gateway",
                        "position": {"x": 20, "y": 20},
                        "capacity": {"ops_per_second": 900, "cpu_cores": 2, "memory_gb": 4},
                        "scaling": {"replicas": 1, "vertical_tier": "small"},
                        "behavior": {"stateful": False},
                    },
                    {
                        "id": "database",
                        "type": "database",
                        "label": "Primary DB",
                        "position": {"x": 240, "y": 80},
                        "capacity": {"ops_per_second": 500, "cpu_cores": 2, "memory_gb": 4},
                        "scaling": {"replicas": 1, "vertical_tier": "small"},
                        "behavior": {"stateful": True},
                    },
                ],
                "edges": [{"id": "edge-1", "source_id": "gateway", "target_id": "database"}],
                "traffic_profile": {
                    "baseline_rps": 2800,
                    "peak_multiplier": 3,
                    "read_percentage": 80,
                    "write_percentage": 20,
                    "payload_kb": 12,
                    "region_distribution": {
                        "us_east": 50,
                        "us_west": 20,
                        "europe": 20,
                        "apac": 10,
                    },
                    "burstiness": "spiky",
                },
            }
        }
    )

    def to_domain(self) -> SimulationInput:
        return SimulationInput(
            components=tuple(c.to_domain() for c in self.components),
            edges=tuple(e.to_domain() for e in self.edges),
            traffic_profile=self.traffic_profile.to_domain(),
        )


class TopologyValidationApiRequest(BaseModel):
    """Request body for topology validation."""

    components: list[ComponentApiModel] = Field(default_factory=list)
    edges: list[EdgeApiModel] = Field(default_factory=list)


# ==================== Failure injection ====================


class FailureInjectionProfileApiModel(BaseModel):
    """Failure scenario with mode-specific parameters."""

    model_config = ConfigDict(from_attributes=True)

    mode: FailureMode
    target_component_id: str | None = Field(
        None, min_length=1, description="Target for node-down and dependency-lag"
    )
    az_name: Literal["az-a", "az-b"] | None = Field(None, description="Zone for az-down")
    lag_ms: float | None = Field(
        None, ge=50, le=5000, description="Injected lag for dependency-lag (default 250)"
    )
    surge_multiplier: float | None = Field(
        None, ge=1.1, le=10, description="Traffic multiplier for traffic-surge (default 2)"
    )

    @model_validator(mode="after")
    def check_mode_fields(self) -> "FailureInjectionProfileApiModel":
        if self.mode in (FailureMode.NODE_DOWN, FailureMode.DEPENDENCY_LAG) and not self.target_component_id:
            raise ValueError(f"target_component_id is required for {self.mode.value} mode.")
        if self.mode == FailureMode.AZ_DOWN and not self.az_name:
            raise ValueError("az_name is required for az-down mode.")
        return self

    def to_domain(self) -> FailureInjectionProfile:
        return FailureInjectionProfile(
            mode=self.mode,
            target_component_id=self.target_component_id,
            az_name=self.az_name,
            lag_ms=self.lag_ms,
            surge_multiplier=self.surge_multiplier,
        )


class FailureInjectionApiRequest(BaseModel):
    """Request body for a failure-injection run."""

    input: SimulationInputApiModel
    profile: FailureInjectionProfileApiModel


# ==================== Results ====================


class SimulationMetricsApiModel(BaseModel):
    """System-wide metrics of a run."""

    model_config = ConfigDict(from_attributes=True)

    peak_rps: float = Field(..., ge=0)
    capacity_rps: float = Field(..., ge=0)
    throughput_rps: float = Field(..., ge=0)
    p50_latency_ms: float = Field(..., ge=0)
    p95_latency_ms: float = Field(..., ge=0)
    error_rate_percent: float = Field(..., ge=0, le=100)
    saturated: bool


class BottleneckApiModel(BaseModel):
    """A component under pressure."""

    model_config = ConfigDict(from_attributes=True)

    component_id: str
    component_label: str
    component_type: ComponentType
    utilization_percent: float = Field(..., ge=0)
    required_rps: float = Field(..., ge=0)
    capacity_rps: float = Field(..., ge=0)
    severity: BottleneckSeverity
    reason: str


class TimelineEventApiModel(BaseModel):
    """One entry of the run narrative."""

    model_config = ConfigDict(from_attributes=True)

    sequence: int = Field(..., ge=0)
    at_second: int = Field(..., ge=0)
    severity: EventSeverity
    title: str
    description: str
    component_id: str | None = None


class SimulationResultApiModel(BaseModel):
    """Metrics, bottlenecks and timeline of a run."""

    model_config = ConfigDict(from_attributes=True)

    metrics: SimulationMetricsApiModel
    bottlenecks: list[BottleneckApiModel] = Field(default_factory=list)
    timeline: list[TimelineEventApiModel] = Field(default_factory=list)


class TopologyWarningApiModel(BaseModel):
    """A topology finding."""

    model_config = ConfigDict(from_attributes=True)

    code: WarningCode
    message: str
    node_id: str | None = None
    edge_id: str | None = None


class SimulationApiResponse(BaseModel):
    """Response from a simulation run."""

    model_config = ConfigDict(from_attributes=True)

    run_id: str = Field(..., description="UUID of this run")
    computed_at: datetime
    result: SimulationResultApiModel
    warnings: list[TopologyWarningApiModel] = Field(default_factory=list)


class ImpactedComponentApiModel(BaseModel):
    """A component in the blast radius."""

    model_config = ConfigDict(from_attributes=True)

    component_id: str
    component_label: str
    component_type: ComponentType
    severity: BottleneckSeverity
    reason: str


class BlastRadiusApiModel(BaseModel):
    """Impact summary of a failure-injected run."""

    model_config = ConfigDict(from_attributes=True)

    mode: FailureMode
    impacted_components: list[ImpactedComponentApiModel] = Field(default_factory=list, max_length=6)
    impacted_count: int = Field(..., ge=0)
    critical_count: int = Field(..., ge=0)
    estimated_user_impact_percent: float = Field(..., ge=0, le=100)
    summary: str


class FailureInjectionApiResponse(BaseModel):
    """Baseline and injected results side by side."""

    model_config = ConfigDict(from_attributes=True)

    run_id: str
    computed_at: datetime
    profile: FailureInjectionProfileApiModel
    baseline: SimulationResultApiModel
    injected: SimulationResultApiModel
    impacted_component_ids: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    blast_radius: BlastRadiusApiModel


class TopologyValidationApiResponse(BaseModel):
    """Topology findings."""

    model_config = ConfigDict(from_attributes=True)

    warning_count: int = Field(..., ge=0)
    warnings: list[TopologyWarningApiModel] = Field(default_factory=list)


class TrafficPresetsApiResponse(BaseModel):
    """Named traffic profile presets and the profile new sketches start from."""

    presets: dict[str, TrafficProfileApiModel]
    default: TrafficProfileApiModel
