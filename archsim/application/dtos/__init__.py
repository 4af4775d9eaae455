"""Application layer DTOs.

This package contains data transfer objects (DTOs) for the application layer.
Uses dataclasses (not Pydantic) per Clean Architecture principles.
"""

from archsim.application.dtos.simulation_dto import (
    FailureInjectionRequest,
    FailureInjectionResponse,
    SimulationRequest,
    SimulationResponse,
    TopologyValidationRequest,
    TopologyValidationResponse,
)

__all__ = [
    "SimulationRequest",
    "SimulationResponse",
    "FailureInjectionRequest",
    "FailureInjectionResponse",
    "TopologyValidationRequest",
    "TopologyValidationResponse",
]
