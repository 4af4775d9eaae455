"""Simulation API routes.

Implements:
- POST /api/v1/simulations: analytical run of one architecture version
- POST /api/v1/simulations/failure-injection: baseline vs failure-injected run
- GET /api/v1/traffic-presets: named traffic profile presets
"""

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, status

from archsim.application.dtos.simulation_dto import (
    FailureInjectionRequest,
    SimulationRequest,
)
from archsim.application.use_cases.run_failure_injection import RunFailureInjectionUseCase
from archsim.application.use_cases.run_simulation import RunSimulationUseCase
from archsim.domain.entities.failure_injection import FailureMode
from archsim.domain.entities.simulation_result import SimulationComputationResult
from archsim.domain.entities.traffic_presets import (
    DEFAULT_TRAFFIC_PROFILE,
    TRAFFIC_PROFILE_PRESETS,
)
from archsim.domain.services.blast_radius_service import BlastRadiusService
from archsim.domain.services.failure_injector import FailureInjector
from archsim.domain.services.simulation_engine import SimulationEngine
from archsim.domain.services.topology_validator import TopologyValidator
from archsim.infrastructure.api.schemas.error_schema import ProblemDetails
from archsim.infrastructure.api.schemas.simulation_schema import (
    FailureInjectionApiRequest,
    FailureInjectionApiResponse,
    SimulationApiResponse,
    SimulationInputApiModel,
    TrafficPresetsApiResponse,
    TrafficProfileApiModel,
)
from archsim.infrastructure.observability.metrics import (
    record_failure_injection,
    record_simulation_run,
)
from archsim.infrastructure.observability.tracing import get_tracer

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

router = APIRouter()

TARGETED_MODES = (FailureMode.NODE_DOWN, FailureMode.DEPENDENCY_LAG)


def get_run_simulation_use_case() -> RunSimulationUseCase:
    """Build RunSimulationUseCase with its domain services."""
    return RunSimulationUseCase(
        simulation_engine=SimulationEngine(),
        topology_validator=TopologyValidator(),
    )


def get_failure_injection_use_case() -> RunFailureInjectionUseCase:
    """Build RunFailureInjectionUseCase with its domain services."""
    return RunFailureInjectionUseCase(
        simulation_engine=SimulationEngine(),
        failure_injector=FailureInjector(),
        blast_radius_service=BlastRadiusService(),
    )


def _outcome(result: SimulationComputationResult, component_count: int) -> str:
    if component_count == 0:
        return "empty"
    return "saturated" if result.metrics.saturated else "healthy"


@router.post(
    "/simulations",
    response_model=SimulationApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Simulate an architecture",
    description=(
        "Estimate throughput, latency percentiles, error rate and per-component "
        "bottlenecks for an architecture under its traffic profile. Topology "
        "warnings are returned alongside but never block the run."
    ),
    tags=["Simulations"],
    responses={
        200: {"description": "Simulation completed"},
        400: {"model": ProblemDetails, "description": "Invalid request"},
        422: {"model": ProblemDetails, "description": "Validation error"},
        429: {"model": ProblemDetails, "description": "Rate limit exceeded"},
    },
)
async def run_simulation(
    body: SimulationInputApiModel,
    use_case: RunSimulationUseCase = Depends(get_run_simulation_use_case),
) -> SimulationApiResponse:
    """Run one analytical simulation."""
    try:
        simulation_input = body.to_domain()

        with tracer.start_as_current_span("simulation.run") as span:
            span.set_attribute("simulation.components", len(simulation_input.components))
            span.set_attribute("simulation.edges", len(simulation_input.edges))

            start_time = time.perf_counter()
            response = use_case.execute(SimulationRequest(simulation_input=simulation_input))
            duration = time.perf_counter() - start_time

            span.set_attribute("simulation.saturated", response.result.metrics.saturated)
            span.set_attribute("simulation.bottlenecks", len(response.result.bottlenecks))

        record_simulation_run(
            outcome=_outcome(response.result, len(simulation_input.components)),
            kind="baseline",
            duration=duration,
            bottleneck_severities=[b.severity.value for b in response.result.bottlenecks],
        )

        return SimulationApiResponse.model_validate(response)

    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except Exception as e:
        logger.error(f"Error running simulation: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred during simulation",
        ) from e


@router.post(
    "/simulations/failure-injection",
    response_model=FailureInjectionApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Simulate an architecture under a failure scenario",
    description=(
        "Run the architecture once as declared and once with the failure profile "
        "applied (node down, AZ down, dependency lag or traffic surge), and "
        "summarize the blast radius of the injected run."
    ),
    tags=["Simulations"],
    responses={
        200: {"description": "Failure injection completed"},
        400: {"model": ProblemDetails, "description": "Invalid request"},
        422: {"model": ProblemDetails, "description": "Validation error or unknown target"},
        429: {"model": ProblemDetails, "description": "Rate limit exceeded"},
    },
)
async def run_failure_injection(
    body: FailureInjectionApiRequest,
    use_case: RunFailureInjectionUseCase = Depends(get_failure_injection_use_case),
) -> FailureInjectionApiResponse:
    """Run a baseline and a failure-injected simulation."""
    try:
        request = FailureInjectionRequest(
            simulation_input=body.input.to_domain(),
            profile=body.profile.to_domain(),
        )

        with tracer.start_as_current_span("simulation.failure_injection") as span:
            span.set_attribute("failure.mode", request.profile.mode.value)
            span.set_attribute("simulation.components", len(request.simulation_input.components))

            start_time = time.perf_counter()
            response = use_case.execute(request)
            duration = time.perf_counter() - start_time

            span.set_attribute("failure.impacted", len(response.impacted_component_ids))
            span.set_attribute("failure.blast_radius", response.blast_radius.impacted_count)

        if request.profile.mode in TARGETED_MODES and not response.impacted_component_ids:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=(
                    f"Target component '{request.profile.target_component_id}' "
                    "does not exist in the submitted architecture."
                ),
            )

        record_failure_injection(request.profile.mode.value)
        record_simulation_run(
            outcome=_outcome(response.injected, len(request.simulation_input.components)),
            kind="failure_injection",
            duration=duration,
            bottleneck_severities=[b.severity.value for b in response.injected.bottlenecks],
        )

        return FailureInjectionApiResponse.model_validate(response)

    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except Exception as e:
        logger.error(f"Error running failure injection: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred during failure injection",
        ) from e


@router.get(
    "/traffic-presets",
    response_model=TrafficPresetsApiResponse,
    status_code=status.HTTP_200_OK,
    summary="List traffic profile presets",
    tags=["Simulations"],
)
async def list_traffic_presets() -> TrafficPresetsApiResponse:
    """Return the named traffic profiles offered as starting points."""
    return TrafficPresetsApiResponse(
        presets={
            name: TrafficProfileApiModel.model_validate(profile)
            for name, profile in TRAFFIC_PROFILE_PRESETS.items()
        },
        default=TrafficProfileApiModel.model_validate(DEFAULT_TRAFFIC_PROFILE),
    )
