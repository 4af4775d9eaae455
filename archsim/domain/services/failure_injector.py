"""Failure injection service.

Clones a simulation input and applies one failure scenario to the copy. The
caller's input is never touched, so the same input can be reused for a
baseline run and any number of concurrent what-if runs.
"""

import copy
import logging
import math
from dataclasses import replace

from archsim.domain.entities.architecture import Component, SimulationInput
from archsim.domain.entities.failure_injection import (
    FailureInjectionApplication,
    FailureInjectionProfile,
    FailureMode,
)
from archsim.domain.services.capacity_model import clamp

logger = logging.getLogger(__name__)


def resolve_az_name(component: Component) -> str:
    """Resolve the availability zone of a component from its canvas position.

    Components at x <= 2500 live in "az-a", everything else in "az-b". This
    is a geometric stand-in, not a real zone model.
    """
    return "az-a" if component.position.x <= FailureInjector.AZ_BOUNDARY_X else "az-b"


def _floor_at_one(value: float) -> float:
    return max(1.0, value)


class FailureInjector:
    """Applies node-down, az-down, dependency-lag and traffic-surge scenarios.

    Targets that match no component are a silent no-op: the returned
    impacted set is empty and callers decide whether that is an error.
    """

    AZ_BOUNDARY_X: float = 2500.0

    NODE_DOWN_CPU_FACTOR: float = 0.1
    NODE_DOWN_MEMORY_FACTOR: float = 0.15

    AZ_DOWN_OPS_FACTOR: float = 0.28
    AZ_DOWN_CPU_FACTOR: float = 0.6
    AZ_DOWN_MEMORY_FACTOR: float = 0.72
    AZ_DOWN_REPLICA_FACTOR: float = 0.5

    DEFAULT_LAG_MS: float = 250.0
    LAG_OPS_FACTOR: float = 0.55
    LAG_CPU_FACTOR: float = 0.82
    LAG_MEMORY_FACTOR: float = 0.9
    LAG_MS_PER_PAYLOAD_KB: float = 15.0
    PAYLOAD_KB_RANGE: tuple[float, float] = (0.1, 10_000.0)

    DEFAULT_SURGE_MULTIPLIER: float = 2.0
    SURGE_PEAK_DAMPING: float = 0.35
    BASELINE_RPS_RANGE: tuple[float, float] = (1.0, 10_000_000.0)
    PEAK_MULTIPLIER_RANGE: tuple[float, float] = (1.0, 50.0)

    def apply(
        self,
        simulation_input: SimulationInput,
        profile: FailureInjectionProfile,
    ) -> FailureInjectionApplication:
        """Apply a failure profile to a copy of the input.

        Args:
            simulation_input: Original input (left untouched)
            profile: Failure scenario to apply

        Returns:
            FailureInjectionApplication with the mutated copy, impacted
            component ids (in topology order) and human-readable notes
        """
        next_input: SimulationInput = copy.deepcopy(simulation_input)
        impacted: list[str] = []
        notes: list[str] = []

        match FailureMode(profile.mode):
            case FailureMode.NODE_DOWN:
                if profile.target_component_id:
                    next_input = self._node_down(next_input, profile.target_component_id, impacted, notes)
            case FailureMode.AZ_DOWN:
                if profile.az_name:
                    next_input = self._az_down(next_input, profile.az_name, impacted)
                    notes.append(f"Applied AZ outage in {profile.az_name}.")
            case FailureMode.DEPENDENCY_LAG:
                if profile.target_component_id:
                    lag_ms = profile.lag_ms if profile.lag_ms is not None else self.DEFAULT_LAG_MS
                    next_input = self._dependency_lag(
                        next_input, profile.target_component_id, lag_ms, impacted
                    )
                    notes.append(f"Injected {lag_ms:g}ms dependency lag.")
            case FailureMode.TRAFFIC_SURGE:
                multiplier = (
                    profile.surge_multiplier
                    if profile.surge_multiplier is not None
                    else self.DEFAULT_SURGE_MULTIPLIER
                )
                next_input = self._traffic_surge(next_input, multiplier)
                notes.append(f"Applied traffic surge multiplier x{multiplier:.2f}.")

        # Components may share an id; report each id once, in topology order
        impacted = list(dict.fromkeys(impacted))

        logger.debug(
            "Failure injected: mode=%s impacted=%d",
            FailureMode(profile.mode).value,
            len(impacted),
        )

        return FailureInjectionApplication(
            input=next_input,
            impacted_component_ids=impacted,
            notes=notes,
        )

    def _node_down(
        self,
        simulation_input: SimulationInput,
        target_id: str,
        impacted: list[str],
        notes: list[str],
    ) -> SimulationInput:
        components = []
        for component in simulation_input.components:
            if component.id != target_id:
                components.append(component)
                continue

            impacted.append(component.id)
            notes.append(f"Forced {component.label} offline.")
            components.append(
                replace(
                    component,
                    capacity=replace(
                        component.capacity,
                        ops_per_second=1.0,
                        cpu_cores=_floor_at_one(component.capacity.cpu_cores * self.NODE_DOWN_CPU_FACTOR),
                        memory_gb=_floor_at_one(
                            component.capacity.memory_gb * self.NODE_DOWN_MEMORY_FACTOR
                        ),
                    ),
                    scaling=replace(component.scaling, replicas=1),
                )
            )

        return replace(simulation_input, components=tuple(components))

    def _az_down(
        self,
        simulation_input: SimulationInput,
        az_name: str,
        impacted: list[str],
    ) -> SimulationInput:
        components = []
        for component in simulation_input.components:
            if resolve_az_name(component) != az_name:
                components.append(component)
                continue

            impacted.append(component.id)
            components.append(
                replace(
                    component,
                    capacity=replace(
                        component.capacity,
                        ops_per_second=_floor_at_one(
                            component.capacity.ops_per_second * self.AZ_DOWN_OPS_FACTOR
                        ),
                        cpu_cores=_floor_at_one(component.capacity.cpu_cores * self.AZ_DOWN_CPU_FACTOR),
                        memory_gb=_floor_at_one(
                            component.capacity.memory_gb * self.AZ_DOWN_MEMORY_FACTOR
                        ),
                    ),
                    scaling=replace(
                        component.scaling,
                        replicas=max(
                            1, math.floor(component.scaling.replicas * self.AZ_DOWN_REPLICA_FACTOR)
                        ),
                    ),
                )
            )

        return replace(simulation_input, components=tuple(components))

    def _dependency_lag(
        self,
        simulation_input: SimulationInput,
        target_id: str,
        lag_ms: float,
        impacted: list[str],
    ) -> SimulationInput:
        components = []
        for component in simulation_input.components:
            if component.id != target_id:
                components.append(component)
                continue

            impacted.append(component.id)
            components.append(
                replace(
                    component,
                    capacity=replace(
                        component.capacity,
                        ops_per_second=_floor_at_one(
                            component.capacity.ops_per_second * self.LAG_OPS_FACTOR
                        ),
                        cpu_cores=_floor_at_one(component.capacity.cpu_cores * self.LAG_CPU_FACTOR),
                        memory_gb=_floor_at_one(component.capacity.memory_gb * self.LAG_MEMORY_FACTOR),
                    ),
                )
            )

        # Payload growth is the only system-wide proxy for added wire latency
        traffic_profile = simulation_input.traffic_profile
        traffic_profile = replace(
            traffic_profile,
            payload_kb=clamp(
                traffic_profile.payload_kb + lag_ms / self.LAG_MS_PER_PAYLOAD_KB,
                *self.PAYLOAD_KB_RANGE,
            ),
        )

        return replace(simulation_input, components=tuple(components), traffic_profile=traffic_profile)

    def _traffic_surge(self, simulation_input: SimulationInput, multiplier: float) -> SimulationInput:
        traffic_profile = simulation_input.traffic_profile
        baseline_rps = max(
            1,
            math.floor(clamp(traffic_profile.baseline_rps * multiplier, *self.BASELINE_RPS_RANGE)),
        )
        peak_multiplier = clamp(
            traffic_profile.peak_multiplier * (1 + (multiplier - 1) * self.SURGE_PEAK_DAMPING),
            *self.PEAK_MULTIPLIER_RANGE,
        )

        return replace(
            simulation_input,
            traffic_profile=replace(
                traffic_profile,
                baseline_rps=baseline_rps,
                peak_multiplier=peak_multiplier,
            ),
        )


_default_injector = FailureInjector()


def apply_failure_injection(
    simulation_input: SimulationInput,
    profile: FailureInjectionProfile,
) -> FailureInjectionApplication:
    """Apply a failure profile with the default injector."""
    return _default_injector.apply(simulation_input, profile)
