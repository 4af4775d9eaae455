"""Topology validation API route."""

from fastapi import APIRouter, Depends, status

from archsim.application.dtos.simulation_dto import TopologyValidationRequest
from archsim.application.use_cases.validate_topology import ValidateTopologyUseCase
from archsim.domain.services.topology_validator import TopologyValidator
from archsim.infrastructure.api.schemas.error_schema import ProblemDetails
from archsim.infrastructure.api.schemas.simulation_schema import (
    TopologyValidationApiRequest,
    TopologyValidationApiResponse,
)

router = APIRouter()


def get_validate_topology_use_case() -> ValidateTopologyUseCase:
    return ValidateTopologyUseCase(topology_validator=TopologyValidator())


@router.post(
    "/topology/validate",
    response_model=TopologyValidationApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Validate an architecture topology",
    description=(
        "Report single points of failure, dangling links and disconnected "
        "components. Warnings are advisory."
    ),
    tags=["Topology"],
    responses={
        422: {"model": ProblemDetails, "description": "Validation error"},
    },
)
async def validate_topology(
    body: TopologyValidationApiRequest,
    use_case: ValidateTopologyUseCase = Depends(get_validate_topology_use_case),
) -> TopologyValidationApiResponse:
    """Validate the shape of an architecture graph."""
    response = use_case.execute(
        TopologyValidationRequest(
            components=[c.to_domain() for c in body.components],
            edges=[e.to_domain() for e in body.edges],
        )
    )
    return TopologyValidationApiResponse.model_validate(response)
