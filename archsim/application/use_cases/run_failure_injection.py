"""Use case: simulate an architecture under a failure scenario.

Orchestrates the failure-injection workflow:
1. Run the baseline simulation on the untouched input
2. Apply the failure profile to a copy of the input
3. Re-run the simulation on the copy
4. Derive the blast radius from the re-run
"""

import logging

from archsim.application.dtos.simulation_dto import (
    FailureInjectionRequest,
    FailureInjectionResponse,
)
from archsim.domain.entities.failure_injection import FailureMode
from archsim.domain.services.blast_radius_service import BlastRadiusService
from archsim.domain.services.failure_injector import FailureInjector
from archsim.domain.services.simulation_engine import SimulationEngine

logger = logging.getLogger(__name__)


class RunFailureInjectionUseCase:
    """Compare a baseline run against a failure-injected run."""

    def __init__(
        self,
        simulation_engine: SimulationEngine,
        failure_injector: FailureInjector,
        blast_radius_service: BlastRadiusService,
    ):
        self._engine = simulation_engine
        self._injector = failure_injector
        self._blast_radius = blast_radius_service

    def execute(self, request: FailureInjectionRequest) -> FailureInjectionResponse:
        """Execute the failure-injection analysis.

        An unknown target component is not an error here; the response simply
        carries an empty impacted set and callers decide how to treat it.

        Args:
            request: Input and failure profile

        Returns:
            FailureInjectionResponse with baseline, injected result and blast radius
        """
        profile = request.profile

        baseline = self._engine.run(request.simulation_input)
        application = self._injector.apply(request.simulation_input, profile)
        injected = self._engine.run(application.input)
        blast_radius = self._blast_radius.derive(profile, injected)

        logger.info(
            "Failure injection completed: mode=%s impacted=%d blast_radius=%d "
            "user_impact_percent=%.2f",
            FailureMode(profile.mode).value,
            len(application.impacted_component_ids),
            blast_radius.impacted_count,
            blast_radius.estimated_user_impact_percent,
        )

        return FailureInjectionResponse(
            profile=profile,
            baseline=baseline,
            injected=injected,
            impacted_component_ids=application.impacted_component_ids,
            notes=application.notes,
            blast_radius=blast_radius,
        )
