"""Use cases - Application-specific business rules.

This package contains use cases that orchestrate domain logic
and implement application-specific workflows.
"""

from archsim.application.use_cases.run_failure_injection import (
    RunFailureInjectionUseCase,
)
from archsim.application.use_cases.run_simulation import RunSimulationUseCase
from archsim.application.use_cases.validate_topology import ValidateTopologyUseCase

__all__ = [
    "RunSimulationUseCase",
    "RunFailureInjectionUseCase",
    "ValidateTopologyUseCase",
]
