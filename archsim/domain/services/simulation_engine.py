"""Architecture simulation engine.

Combines every component's effective capacity and demand share into one
system-wide throughput ceiling, a ranked bottleneck list, latency/error
estimates and a run timeline. The engine is pure and stateless: identical
input always yields identical output and caller data is never mutated.
"""

import logging
import math

from archsim.domain.entities.architecture import Burstiness, SimulationInput
from archsim.domain.entities.simulation_result import (
    BasicSimulationOutput,
    Bottleneck,
    BottleneckSeverity,
    EventSeverity,
    SimulationComputationResult,
    SimulationMetrics,
    TimelineEvent,
)
from archsim.domain.services.capacity_model import CapacityModel
from archsim.domain.services.demand_model import DemandModel
from archsim.domain.services.latency_estimator import LatencyEstimator
from archsim.domain.services.timeline_synthesizer import TimelineSynthesizer

logger = logging.getLogger(__name__)


class SimulationEngine:
    """Closed-form capacity and latency model for a whole topology.

    Algorithm:
    1. adjusted demand = baseline * peak multiplier * burst factor
    2. For each component, required = max(1, demand * weight) and the
       component caps the system at capacity / weight
    3. The tightest normalized capacity is the system ceiling
    4. Components at >= 80% utilization become ranked bottlenecks
    """

    BURST_FACTOR: dict[Burstiness, float] = {
        Burstiness.STEADY: 1.0,
        Burstiness.SPIKY: 1.2,
        Burstiness.EXTREME: 1.45,
    }

    BOTTLENECK_THRESHOLD_PERCENT: float = 80.0
    CRITICAL_THRESHOLD_PERCENT: float = 140.0
    HIGH_THRESHOLD_PERCENT: float = 110.0
    MEDIUM_THRESHOLD_PERCENT: float = 90.0
    OVERLOAD_THRESHOLD_PERCENT: float = 100.0

    OVERLOAD_REASON: str = "Demand is above available component capacity."
    PRESSURE_REASON: str = "Component is approaching saturation under peak assumptions."

    def __init__(
        self,
        capacity_model: CapacityModel | None = None,
        demand_model: DemandModel | None = None,
        latency_estimator: LatencyEstimator | None = None,
        timeline_synthesizer: TimelineSynthesizer | None = None,
    ):
        self._capacity_model = capacity_model or CapacityModel()
        self._demand_model = demand_model or DemandModel()
        self._latency_estimator = latency_estimator or LatencyEstimator()
        self._timeline_synthesizer = timeline_synthesizer or TimelineSynthesizer()

    def run(self, simulation_input: SimulationInput) -> SimulationComputationResult:
        """Run the simulation for a topology and traffic profile.

        Input is assumed to have passed boundary validation already.

        Args:
            simulation_input: Components, edges and traffic profile

        Returns:
            SimulationComputationResult with metrics, bottlenecks and timeline
        """
        traffic_profile = simulation_input.traffic_profile
        peak_rps = traffic_profile.baseline_rps * traffic_profile.peak_multiplier

        if not simulation_input.components:
            return self._empty_topology_result(peak_rps)

        burst_factor = self.BURST_FACTOR[Burstiness(traffic_profile.burstiness)]
        adjusted_demand_rps = peak_rps * burst_factor

        system_capacity_rps = math.inf
        bottlenecks: list[Bottleneck] = []

        for component in simulation_input.components:
            capacity_rps = self._capacity_model.effective_capacity(component)
            demand_weight = self._demand_model.demand_weight(component.type, traffic_profile)
            required_rps = max(1.0, adjusted_demand_rps * demand_weight)

            # Tightest constraint wins
            system_capacity_rps = min(system_capacity_rps, capacity_rps / demand_weight)

            utilization_percent = required_rps / capacity_rps * 100
            if utilization_percent >= self.BOTTLENECK_THRESHOLD_PERCENT:
                bottlenecks.append(
                    Bottleneck(
                        component_id=component.id,
                        component_label=component.label,
                        component_type=component.type,
                        utilization_percent=utilization_percent,
                        required_rps=required_rps,
                        capacity_rps=capacity_rps,
                        severity=self.bottleneck_severity(utilization_percent),
                        reason=(
                            self.OVERLOAD_REASON
                            if utilization_percent >= self.OVERLOAD_THRESHOLD_PERCENT
                            else self.PRESSURE_REASON
                        ),
                    )
                )

        bottlenecks.sort(key=lambda b: b.utilization_percent, reverse=True)

        # Overflowed capacity is treated as no usable capacity
        if not math.isfinite(system_capacity_rps):
            system_capacity_rps = 0.0

        throughput_rps = max(0.0, min(adjusted_demand_rps, system_capacity_rps))
        saturated = adjusted_demand_rps > system_capacity_rps

        estimate = self._latency_estimator.estimate(
            adjusted_demand_rps=adjusted_demand_rps,
            system_capacity_rps=system_capacity_rps,
            max_utilization_percent=bottlenecks[0].utilization_percent if bottlenecks else None,
            payload_kb=traffic_profile.payload_kb,
            burst_factor=burst_factor,
        )

        logger.debug(
            "Simulation computed: components=%d bottlenecks=%d saturated=%s",
            len(simulation_input.components),
            len(bottlenecks),
            saturated,
        )

        return SimulationComputationResult(
            metrics=SimulationMetrics(
                peak_rps=adjusted_demand_rps,
                capacity_rps=system_capacity_rps,
                throughput_rps=throughput_rps,
                p50_latency_ms=estimate.p50_latency_ms,
                p95_latency_ms=estimate.p95_latency_ms,
                error_rate_percent=estimate.error_rate_percent,
                saturated=saturated,
            ),
            bottlenecks=bottlenecks,
            timeline=self._timeline_synthesizer.build(bottlenecks, saturated),
        )

    def bottleneck_severity(self, utilization_percent: float) -> BottleneckSeverity:
        """Classify a utilization percentage into a bottleneck severity."""
        if utilization_percent >= self.CRITICAL_THRESHOLD_PERCENT:
            return BottleneckSeverity.CRITICAL
        if utilization_percent >= self.HIGH_THRESHOLD_PERCENT:
            return BottleneckSeverity.HIGH
        if utilization_percent >= self.MEDIUM_THRESHOLD_PERCENT:
            return BottleneckSeverity.MEDIUM
        return BottleneckSeverity.LOW

    @staticmethod
    def _empty_topology_result(peak_rps: float) -> SimulationComputationResult:
        """Degenerate result for a topology with nothing drawn yet."""
        return SimulationComputationResult(
            metrics=SimulationMetrics(
                peak_rps=peak_rps,
                capacity_rps=0.0,
                throughput_rps=0.0,
                p50_latency_ms=0.0,
                p95_latency_ms=0.0,
                error_rate_percent=100.0,
                saturated=True,
            ),
            bottlenecks=[],
            timeline=[
                TimelineEvent(
                    sequence=0,
                    at_second=0,
                    severity=EventSeverity.CRITICAL,
                    title="Invalid topology",
                    description="No components were found in the version graph.",
                )
            ],
        )


_default_engine = SimulationEngine()


def run_architecture_simulation(simulation_input: SimulationInput) -> SimulationComputationResult:
    """Run the simulation with the default engine configuration.

    Args:
        simulation_input: Components, edges and traffic profile

    Returns:
        SimulationComputationResult with metrics, bottlenecks and timeline
    """
    return _default_engine.run(simulation_input)


def run_basic_simulation(
    requests_per_second: float,
    replicas: int,
    capacity_per_replica: float,
) -> BasicSimulationOutput:
    """Single-tier replica model: throughput is demand capped at replicas * capacity.

    Args:
        requests_per_second: Offered load
        replicas: Number of identical replicas
        capacity_per_replica: Capacity of one replica in requests per second

    Returns:
        BasicSimulationOutput with served throughput and saturation flag
    """
    max_throughput = replicas * capacity_per_replica
    return BasicSimulationOutput(
        throughput=min(requests_per_second, max_throughput),
        saturated=requests_per_second > max_throughput,
    )
