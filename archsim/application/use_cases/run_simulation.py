"""Use case: simulate an architecture under its declared traffic profile.

Orchestrates:
1. Advisory topology validation
2. The closed-form simulation engine
3. Packaging of the result with its warnings
"""

import logging

from archsim.application.dtos.simulation_dto import SimulationRequest, SimulationResponse
from archsim.domain.services.simulation_engine import SimulationEngine
from archsim.domain.services.topology_validator import TopologyValidator

logger = logging.getLogger(__name__)


class RunSimulationUseCase:
    """Run a simulation for one architecture version."""

    def __init__(
        self,
        simulation_engine: SimulationEngine,
        topology_validator: TopologyValidator,
    ):
        self._engine = simulation_engine
        self._validator = topology_validator

    def execute(self, request: SimulationRequest) -> SimulationResponse:
        """Execute the simulation.

        Args:
            request: The simulation request

        Returns:
            SimulationResponse with the computation result and topology warnings
        """
        simulation_input = request.simulation_input

        warnings = self._validator.validate(simulation_input.components, simulation_input.edges)
        result = self._engine.run(simulation_input)

        logger.info(
            "Simulation completed: components=%d bottlenecks=%d saturated=%s "
            "throughput_rps=%.1f error_rate_percent=%.2f",
            len(simulation_input.components),
            len(result.bottlenecks),
            result.metrics.saturated,
            result.metrics.throughput_rps,
            result.metrics.error_rate_percent,
        )

        return SimulationResponse(result=result, warnings=warnings)
