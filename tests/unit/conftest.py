"""Shared builders for unit tests."""

import pytest

from archsim.domain.entities.architecture import (
    Burstiness,
    Component,
    ComponentBehavior,
    ComponentCapacity,
    ComponentScaling,
    ComponentType,
    Edge,
    Position,
    RegionDistribution,
    SimulationInput,
    TrafficProfile,
    VerticalTier,
)


def build_component(
    component_id: str,
    component_type: ComponentType = ComponentType.SERVICE,
    ops_per_second: float = 1000,
    cpu_cores: float = 2,
    memory_gb: float = 4,
    replicas: int = 1,
    vertical_tier: VerticalTier = VerticalTier.MEDIUM,
    stateful: bool = False,
    x: float = 100,
    y: float = 100,
    label: str | None = None,
) -> Component:
    """Helper to create a Component with sensible defaults."""
    return Component(
        id=component_id,
        type=component_type,
        label=label or component_id.replace("-", " ").title(),
        position=Position(x=x, y=y),
        capacity=ComponentCapacity(
            ops_per_second=ops_per_second, cpu_cores=cpu_cores, memory_gb=memory_gb
        ),
        scaling=ComponentScaling(replicas=replicas, vertical_tier=vertical_tier),
        behavior=ComponentBehavior(stateful=stateful),
    )


def build_traffic_profile(
    baseline_rps: float = 2800,
    peak_multiplier: float = 3,
    read_percentage: float = 80,
    write_percentage: float = 20,
    payload_kb: float = 12,
    burstiness: Burstiness = Burstiness.SPIKY,
) -> TrafficProfile:
    """Helper to create a TrafficProfile."""
    return TrafficProfile(
        baseline_rps=baseline_rps,
        peak_multiplier=peak_multiplier,
        read_percentage=read_percentage,
        write_percentage=write_percentage,
        payload_kb=payload_kb,
        region_distribution=RegionDistribution(),
        burstiness=burstiness,
    )


@pytest.fixture
def gateway() -> Component:
    return build_component(
        "gateway",
        ComponentType.API_GATEWAY,
        ops_per_second=900,
        vertical_tier=VerticalTier.SMALL,
        label="Gateway",
        x=20,
        y=20,
    )


@pytest.fixture
def database() -> Component:
    return build_component(
        "database",
        ComponentType.DATABASE,
        ops_per_second=500,
        vertical_tier=VerticalTier.SMALL,
        stateful=True,
        label="Primary DB",
        x=240,
        y=80,
    )


@pytest.fixture
def chain_input(gateway: Component, database: Component) -> SimulationInput:
    """Two-node gateway -> database chain under spiky peak traffic."""
    return SimulationInput(
        components=(gateway, database),
        edges=(Edge(id="edge-1", source_id="gateway", target_id="database"),),
        traffic_profile=build_traffic_profile(),
    )


@pytest.fixture
def healthy_input() -> SimulationInput:
    """A single oversized service under light steady traffic."""
    return SimulationInput(
        components=(
            build_component("api", ops_per_second=10000, cpu_cores=4, memory_gb=8, replicas=2),
        ),
        edges=(),
        traffic_profile=build_traffic_profile(
            baseline_rps=100, peak_multiplier=1, burstiness=Burstiness.STEADY
        ),
    )


@pytest.fixture
def make_component():
    """Factory fixture for components."""
    return build_component


@pytest.fixture
def make_traffic_profile():
    """Factory fixture for traffic profiles."""
    return build_traffic_profile
