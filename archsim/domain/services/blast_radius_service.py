"""Blast radius derivation for failure-injected runs."""

from archsim.domain.entities.failure_injection import (
    BlastRadiusSummary,
    FailureInjectionProfile,
    FailureMode,
    ImpactedComponent,
)
from archsim.domain.entities.simulation_result import (
    BottleneckSeverity,
    SimulationComputationResult,
)
from archsim.domain.services.capacity_model import clamp


class BlastRadiusService:
    """Summarizes which components a failure pushed into high/critical pressure.

    Reports at most six components, in the bottleneck ranking order of the
    re-run, and adds a fixed penalty to user impact when the run saturated.
    """

    MAX_IMPACTED_COMPONENTS: int = 6
    SATURATION_IMPACT_PENALTY: float = 8.0
    IMPACT_SEVERITIES: frozenset[BottleneckSeverity] = frozenset(
        {BottleneckSeverity.CRITICAL, BottleneckSeverity.HIGH}
    )

    def derive(
        self,
        profile: FailureInjectionProfile,
        result: SimulationComputationResult,
    ) -> BlastRadiusSummary:
        """Derive the blast radius from a failure-injected simulation result.

        Args:
            profile: The failure profile that was applied
            result: Simulation result of the injected input

        Returns:
            BlastRadiusSummary for the run
        """
        mode = FailureMode(profile.mode)
        impacted_components = [
            ImpactedComponent(
                component_id=b.component_id,
                component_label=b.component_label,
                component_type=b.component_type,
                severity=b.severity,
                reason=b.reason,
            )
            for b in result.bottlenecks
            if b.severity in self.IMPACT_SEVERITIES
        ][: self.MAX_IMPACTED_COMPONENTS]

        critical_count = sum(
            1 for c in impacted_components if c.severity == BottleneckSeverity.CRITICAL
        )
        estimated_user_impact_percent = clamp(
            result.metrics.error_rate_percent
            + (self.SATURATION_IMPACT_PENALTY if result.metrics.saturated else 0.0),
            0,
            100,
        )

        if impacted_components:
            summary = (
                f"{len(impacted_components)} components are in high/critical pressure "
                f"after {mode.value}."
            )
        else:
            summary = "Failure injected with limited blast radius under current assumptions."

        return BlastRadiusSummary(
            mode=mode,
            impacted_components=impacted_components,
            impacted_count=len(impacted_components),
            critical_count=critical_count,
            estimated_user_impact_percent=estimated_user_impact_percent,
            summary=summary,
        )


_default_service = BlastRadiusService()


def derive_blast_radius_summary(
    profile: FailureInjectionProfile,
    result: SimulationComputationResult,
) -> BlastRadiusSummary:
    """Derive a blast radius summary with the default service."""
    return _default_service.derive(profile, result)
