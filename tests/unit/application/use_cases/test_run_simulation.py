"""Unit tests for RunSimulationUseCase."""

from unittest.mock import Mock

import pytest

from archsim.application.dtos.simulation_dto import SimulationRequest
from archsim.application.use_cases.run_simulation import RunSimulationUseCase
from archsim.domain.entities.topology_warning import TopologyWarning, WarningCode
from archsim.domain.services.simulation_engine import SimulationEngine
from archsim.domain.services.topology_validator import TopologyValidator


@pytest.fixture
def use_case() -> RunSimulationUseCase:
    return RunSimulationUseCase(
        simulation_engine=SimulationEngine(),
        topology_validator=TopologyValidator(),
    )


class TestRunSimulationUseCase:
    """Test the simulation workflow."""

    def test_returns_result_and_warnings(self, use_case, chain_input):
        response = use_case.execute(SimulationRequest(simulation_input=chain_input))

        assert response.result == SimulationEngine().run(chain_input)
        # Both chain components run a single replica
        assert [w.node_id for w in response.warnings if w.code == WarningCode.SPOF] == [
            "gateway",
            "database",
        ]

    def test_assigns_run_metadata(self, use_case, chain_input):
        first = use_case.execute(SimulationRequest(simulation_input=chain_input))
        second = use_case.execute(SimulationRequest(simulation_input=chain_input))

        assert first.run_id != second.run_id
        assert first.computed_at.tzinfo is not None

    def test_warnings_do_not_block_run(self, chain_input):
        """A validator full of findings still yields a result."""
        validator = Mock(spec=TopologyValidator)
        validator.validate.return_value = [
            TopologyWarning(code=WarningCode.INVALID_LINK, message="Edge x references missing nodes.")
        ]
        engine = Mock(wraps=SimulationEngine())
        use_case = RunSimulationUseCase(simulation_engine=engine, topology_validator=validator)

        response = use_case.execute(SimulationRequest(simulation_input=chain_input))

        validator.validate.assert_called_once_with(chain_input.components, chain_input.edges)
        engine.run.assert_called_once_with(chain_input)
        assert response.result.metrics.saturated is True
        assert len(response.warnings) == 1
