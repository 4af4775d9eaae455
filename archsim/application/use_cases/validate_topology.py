"""Use case: report topology warnings without running a simulation."""

from archsim.application.dtos.simulation_dto import (
    TopologyValidationRequest,
    TopologyValidationResponse,
)
from archsim.domain.services.topology_validator import TopologyValidator


class ValidateTopologyUseCase:
    """Validate the shape of an architecture graph."""

    def __init__(self, topology_validator: TopologyValidator):
        self._validator = topology_validator

    def execute(self, request: TopologyValidationRequest) -> TopologyValidationResponse:
        return TopologyValidationResponse(
            warnings=self._validator.validate(request.components, request.edges)
        )
