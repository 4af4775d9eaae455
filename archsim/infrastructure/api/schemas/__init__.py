"""API request/response schemas."""

from archsim.infrastructure.api.schemas.error_schema import ProblemDetails
from archsim.infrastructure.api.schemas.simulation_schema import (
    FailureInjectionApiRequest,
    FailureInjectionApiResponse,
    SimulationApiResponse,
    SimulationInputApiModel,
    TopologyValidationApiRequest,
    TopologyValidationApiResponse,
    TrafficPresetsApiResponse,
)

__all__ = [
    "ProblemDetails",
    "SimulationInputApiModel",
    "SimulationApiResponse",
    "FailureInjectionApiRequest",
    "FailureInjectionApiResponse",
    "TopologyValidationApiRequest",
    "TopologyValidationApiResponse",
    "TrafficPresetsApiResponse",
]
