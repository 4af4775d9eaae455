"""Unit tests for SimulationEngine."""

import copy
from dataclasses import replace

import pytest

from archsim.domain.entities.architecture import (
    Burstiness,
    ComponentType,
    SimulationInput,
    VerticalTier,
)
from archsim.domain.entities.simulation_result import (
    BottleneckSeverity,
    EventSeverity,
)
from archsim.domain.services.simulation_engine import (
    SimulationEngine,
    run_architecture_simulation,
    run_basic_simulation,
)


@pytest.fixture
def engine() -> SimulationEngine:
    return SimulationEngine()


class TestGatewayDatabaseChain:
    """Test the two-node gateway -> database chain."""

    def test_headline_metrics(self, engine, chain_input):
        """Demand of 10080 rps overwhelms a small stateful database."""
        result = engine.run(chain_input)
        metrics = result.metrics

        assert metrics.peak_rps == pytest.approx(2800 * 3 * 1.2)
        assert metrics.capacity_rps > 0
        assert metrics.throughput_rps <= metrics.peak_rps
        assert metrics.p95_latency_ms > metrics.p50_latency_ms
        assert 0 <= metrics.error_rate_percent <= 100
        assert metrics.saturated is True

    def test_database_is_binding_constraint(self, engine, chain_input):
        """System capacity is the database capacity normalized by its weight."""
        result = engine.run(chain_input)

        database_capacity = 500 * 0.75 * 0.89 * 0.9 * 0.94 * 0.86
        database_weight = 0.3 + 0.2 * 0.68 + 0.8 * 0.12
        assert result.metrics.capacity_rps == pytest.approx(database_capacity / database_weight)
        assert result.metrics.throughput_rps == pytest.approx(result.metrics.capacity_rps)

    def test_bottlenecks_ranked_by_utilization(self, engine, chain_input):
        result = engine.run(chain_input)

        assert [b.component_id for b in result.bottlenecks] == ["database", "gateway"]
        utilizations = [b.utilization_percent for b in result.bottlenecks]
        assert utilizations == sorted(utilizations, reverse=True)
        for bottleneck in result.bottlenecks:
            assert bottleneck.severity == BottleneckSeverity.CRITICAL
            assert bottleneck.reason == "Demand is above available component capacity."

    def test_timeline_shape(self, engine, chain_input):
        """Start, one event per bottleneck, then saturation."""
        timeline = engine.run(chain_input).timeline

        assert [e.sequence for e in timeline] == list(range(len(timeline)))
        assert [e.at_second for e in timeline] == [0, 10, 25, 60]
        assert timeline[0].title == "Simulation started"
        assert timeline[1].title == "Capacity pressure on Primary DB"
        assert timeline[1].component_id == "database"
        assert timeline[1].severity == EventSeverity.CRITICAL
        assert timeline[-1].title == "System saturation reached"
        assert timeline[-1].severity == EventSeverity.CRITICAL

    def test_deterministic(self, engine, chain_input):
        """Identical input yields identical output."""
        assert engine.run(chain_input) == engine.run(chain_input)

    def test_input_not_mutated(self, engine, chain_input):
        snapshot = copy.deepcopy(chain_input)
        engine.run(chain_input)
        assert chain_input == snapshot

    def test_module_level_entry_point(self, engine, chain_input):
        assert run_architecture_simulation(chain_input) == engine.run(chain_input)


class TestHealthyTopology:
    """Test a comfortably provisioned topology."""

    def test_no_bottlenecks_and_no_errors(self, engine, healthy_input):
        result = engine.run(healthy_input)

        assert result.bottlenecks == []
        assert result.metrics.saturated is False
        assert result.metrics.error_rate_percent == 0
        assert result.metrics.throughput_rps == pytest.approx(result.metrics.peak_rps)

    def test_timeline_ends_stabilized(self, engine, healthy_input):
        timeline = engine.run(healthy_input).timeline

        assert len(timeline) == 2
        assert timeline[-1].title == "Run stabilized"
        assert timeline[-1].at_second == 45
        assert timeline[-1].severity == EventSeverity.INFO


class TestEmptyTopology:
    """Test the degenerate empty topology."""

    def test_empty_result(self, engine, make_traffic_profile):
        simulation_input = SimulationInput(
            components=(),
            edges=(),
            traffic_profile=make_traffic_profile(baseline_rps=1000, peak_multiplier=2),
        )

        result = engine.run(simulation_input)

        assert result.metrics.peak_rps == 2000
        assert result.metrics.capacity_rps == 0
        assert result.metrics.throughput_rps == 0
        assert result.metrics.p50_latency_ms == 0
        assert result.metrics.p95_latency_ms == 0
        assert result.metrics.error_rate_percent == 100
        assert result.metrics.saturated is True
        assert result.bottlenecks == []
        assert len(result.timeline) == 1
        assert result.timeline[0].title == "Invalid topology"
        assert result.timeline[0].severity == EventSeverity.CRITICAL


class TestNonFiniteCapacity:
    """Test capacity that overflows to infinity."""

    def test_overflowed_capacity_reports_zero_and_saturates(
        self, engine, make_component, make_traffic_profile
    ):
        database = make_component(
            "db",
            ComponentType.DATABASE,
            ops_per_second=1e308,
            replicas=4,
            vertical_tier=VerticalTier.XLARGE,
            stateful=True,
        )
        simulation_input = SimulationInput(
            components=(database,),
            edges=(),
            traffic_profile=make_traffic_profile(baseline_rps=1000, peak_multiplier=2),
        )

        metrics = engine.run(simulation_input).metrics

        assert metrics.capacity_rps == 0
        assert metrics.throughput_rps == 0
        assert metrics.saturated is True
        assert metrics.error_rate_percent == 100


class TestMonotonicity:
    """Test that scaling a component never hurts the system."""

    @pytest.mark.parametrize("replicas", [2, 3, 8])
    def test_more_database_replicas_never_reduce_capacity(
        self, engine, chain_input, replicas
    ):
        baseline = engine.run(chain_input)

        components = tuple(
            replace(c, scaling=replace(c.scaling, replicas=replicas))
            if c.type == ComponentType.DATABASE
            else c
            for c in chain_input.components
        )
        scaled = engine.run(replace(chain_input, components=components))

        assert scaled.metrics.capacity_rps >= baseline.metrics.capacity_rps
        assert scaled.metrics.error_rate_percent <= baseline.metrics.error_rate_percent

    def test_utilization_grows_with_baseline(self, engine, chain_input):
        """Higher offered load never lowers utilization or the error rate."""
        previous = None
        for baseline_rps in (200, 400, 800, 1600, 2800, 5600):
            profile = replace(chain_input.traffic_profile, baseline_rps=baseline_rps)
            result = engine.run(replace(chain_input, traffic_profile=profile))
            top_utilization = max(
                (b.utilization_percent for b in result.bottlenecks), default=0.0
            )

            assert 0 <= result.metrics.error_rate_percent <= 100
            assert result.metrics.throughput_rps <= result.metrics.peak_rps
            if previous is not None:
                assert top_utilization >= previous[0]
                assert result.metrics.error_rate_percent >= previous[1]
            previous = (top_utilization, result.metrics.error_rate_percent)

    def test_burstiness_raises_demand(self, engine, chain_input):
        """Burst factors are 1.0, 1.2 and 1.45."""
        peaks = []
        for burstiness in (Burstiness.STEADY, Burstiness.SPIKY, Burstiness.EXTREME):
            profile = replace(chain_input.traffic_profile, burstiness=burstiness)
            peaks.append(engine.run(replace(chain_input, traffic_profile=profile)).metrics.peak_rps)

        assert peaks == pytest.approx([8400, 10080, 12180])


class TestBottleneckSeverity:
    """Test severity thresholds."""

    @pytest.mark.parametrize(
        "utilization,expected",
        [
            (80.0, BottleneckSeverity.LOW),
            (89.9, BottleneckSeverity.LOW),
            (90.0, BottleneckSeverity.MEDIUM),
            (110.0, BottleneckSeverity.HIGH),
            (139.9, BottleneckSeverity.HIGH),
            (140.0, BottleneckSeverity.CRITICAL),
        ],
    )
    def test_thresholds(self, engine, utilization, expected):
        assert engine.bottleneck_severity(utilization) == expected

    def test_pressure_reason_below_full_utilization(self, engine, make_component, make_traffic_profile):
        """A component at 80-100% utilization is flagged as approaching saturation."""
        # weight 0.9, required 900 against capacity ~1000
        service = make_component("svc", ops_per_second=1000, cpu_cores=3, memory_gb=6)
        capacity = 1000 * (0.65 + 3 * 0.12) * (0.72 + 6 * 0.045) * 0.94
        baseline = capacity * 0.85 / 0.9
        simulation_input = SimulationInput(
            components=(service,),
            edges=(),
            traffic_profile=make_traffic_profile(
                baseline_rps=baseline, peak_multiplier=1, burstiness=Burstiness.STEADY
            ),
        )

        result = engine.run(simulation_input)

        assert len(result.bottlenecks) == 1
        assert result.bottlenecks[0].utilization_percent == pytest.approx(85.0)
        assert result.bottlenecks[0].severity == BottleneckSeverity.LOW
        assert result.bottlenecks[0].reason == (
            "Component is approaching saturation under peak assumptions."
        )
        assert result.metrics.saturated is False


class TestBasicSimulation:
    """Test the single-tier replica model."""

    def test_under_capacity(self):
        output = run_basic_simulation(requests_per_second=500, replicas=2, capacity_per_replica=300)
        assert output.throughput == 500
        assert output.saturated is False

    def test_over_capacity(self):
        output = run_basic_simulation(requests_per_second=1000, replicas=2, capacity_per_replica=300)
        assert output.throughput == 600
        assert output.saturated is True

    def test_exactly_at_capacity_is_not_saturated(self):
        output = run_basic_simulation(requests_per_second=600, replicas=2, capacity_per_replica=300)
        assert output.saturated is False
