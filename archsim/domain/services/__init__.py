"""Domain services - The analytical simulation engine."""

from archsim.domain.services.blast_radius_service import (
    BlastRadiusService,
    derive_blast_radius_summary,
)
from archsim.domain.services.capacity_model import CapacityModel
from archsim.domain.services.demand_model import DemandModel
from archsim.domain.services.failure_injector import (
    FailureInjector,
    apply_failure_injection,
    resolve_az_name,
)
from archsim.domain.services.latency_estimator import LatencyEstimate, LatencyEstimator
from archsim.domain.services.simulation_engine import (
    SimulationEngine,
    run_architecture_simulation,
    run_basic_simulation,
)
from archsim.domain.services.timeline_synthesizer import TimelineSynthesizer
from archsim.domain.services.topology_validator import (
    TopologyValidator,
    validate_architecture_topology,
)

__all__ = [
    "CapacityModel",
    "DemandModel",
    "LatencyEstimator",
    "LatencyEstimate",
    "TimelineSynthesizer",
    "SimulationEngine",
    "run_architecture_simulation",
    "run_basic_simulation",
    "FailureInjector",
    "apply_failure_injection",
    "resolve_az_name",
    "BlastRadiusService",
    "derive_blast_radius_summary",
    "TopologyValidator",
    "validate_architecture_topology",
]
