"""Unit tests for architecture entities and traffic presets."""

from dataclasses import FrozenInstanceError

import pytest

from archsim.domain.entities.architecture import (
    ComponentScaling,
    SimulationInput,
    VerticalTier,
)
from archsim.domain.entities.traffic_presets import (
    DEFAULT_TRAFFIC_PROFILE,
    TRAFFIC_PROFILE_PRESETS,
)


class TestSimulationInput:
    """Test SimulationInput value semantics."""

    def test_sequences_stored_as_tuples(self, gateway, database, make_traffic_profile):
        simulation_input = SimulationInput(
            components=[gateway, database],
            edges=[],
            traffic_profile=make_traffic_profile(),
        )

        assert simulation_input.components == (gateway, database)
        assert simulation_input.edges == ()

    def test_frozen(self, chain_input):
        with pytest.raises(FrozenInstanceError):
            chain_input.traffic_profile = None

    def test_scaling_defaults(self):
        scaling = ComponentScaling()
        assert scaling.replicas == 1
        assert scaling.vertical_tier == VerticalTier.MEDIUM


class TestTrafficPresets:
    """Test the named traffic presets."""

    def test_default_is_interview_preset(self):
        assert DEFAULT_TRAFFIC_PROFILE is TRAFFIC_PROFILE_PRESETS["interview-default"]
        assert DEFAULT_TRAFFIC_PROFILE.baseline_rps == 1500

    @pytest.mark.parametrize("name", sorted(TRAFFIC_PROFILE_PRESETS))
    def test_presets_are_consistent(self, name):
        preset = TRAFFIC_PROFILE_PRESETS[name]
        regions = preset.region_distribution

        assert preset.read_percentage + preset.write_percentage == 100
        assert regions.us_east + regions.us_west + regions.europe + regions.apac == 100
        assert 1 <= preset.peak_multiplier <= 50
