"""DTOs for simulation runs, failure injection and topology validation."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from archsim.domain.entities.architecture import Component, Edge, SimulationInput
from archsim.domain.entities.failure_injection import (
    BlastRadiusSummary,
    FailureInjectionProfile,
)
from archsim.domain.entities.simulation_result import SimulationComputationResult
from archsim.domain.entities.topology_warning import TopologyWarning


def _new_run_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SimulationRequest:
    """Request to simulate one architecture version."""

    simulation_input: SimulationInput


@dataclass
class SimulationResponse:
    """Response from a simulation run."""

    result: SimulationComputationResult
    warnings: list[TopologyWarning] = field(default_factory=list)
    run_id: str = field(default_factory=_new_run_id)
    computed_at: datetime = field(default_factory=_utcnow)


@dataclass
class FailureInjectionRequest:
    """Request to simulate an architecture under a failure scenario."""

    simulation_input: SimulationInput
    profile: FailureInjectionProfile


@dataclass
class FailureInjectionResponse:
    """Baseline and failure-injected results side by side.

    Attributes:
        profile: The failure profile that was applied
        baseline: Result of the untouched input
        injected: Result of the failure-injected input
        impacted_component_ids: Components directly mutated by the injection
        notes: Human-readable notes produced by the injection
        blast_radius: Impact summary of the injected run
        run_id: Identifier of this analysis
        computed_at: When the analysis was performed
    """

    profile: FailureInjectionProfile
    baseline: SimulationComputationResult
    injected: SimulationComputationResult
    impacted_component_ids: list[str]
    notes: list[str]
    blast_radius: BlastRadiusSummary
    run_id: str = field(default_factory=_new_run_id)
    computed_at: datetime = field(default_factory=_utcnow)


@dataclass
class TopologyValidationRequest:
    """Request to validate the shape of a topology."""

    components: list[Component]
    edges: list[Edge]


@dataclass
class TopologyValidationResponse:
    """Topology findings."""

    warnings: list[TopologyWarning] = field(default_factory=list)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)
