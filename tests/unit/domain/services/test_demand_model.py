"""Unit tests for DemandModel."""

import pytest

from archsim.domain.entities.architecture import ComponentType
from archsim.domain.services.demand_model import DemandModel


class TestDemandModel:
    """Test per-type demand weights."""

    @pytest.fixture
    def model(self) -> DemandModel:
        return DemandModel()

    @pytest.mark.parametrize(
        "component_type,expected",
        [
            (ComponentType.CLIENT, 1.0),
            (ComponentType.LOAD_BALANCER, 1.0),
            (ComponentType.API_GATEWAY, 0.96),
            (ComponentType.SERVICE, 0.9),
            (ComponentType.CACHE, 0.25 + 0.8 * 0.7),
            (ComponentType.DATABASE, 0.3 + 0.2 * 0.68 + 0.8 * 0.12),
            (ComponentType.QUEUE, 0.2 + 0.2 * 0.7),
            (ComponentType.CDN, 0.18 + 0.8 * 0.64),
            (ComponentType.OBJECT_STORE, 0.15 + 0.2 * 0.62),
        ],
    )
    def test_weights_for_read_heavy_mix(
        self, model, make_traffic_profile, component_type, expected
    ):
        """Weights for an 80/20 read/write mix."""
        profile = make_traffic_profile(read_percentage=80, write_percentage=20)
        assert model.demand_weight(component_type, profile) == pytest.approx(expected)

    def test_all_weights_in_unit_interval(self, model, make_traffic_profile):
        """Every kind gets a weight in (0, 1] at the extremes of the mix."""
        for read in (0, 100):
            profile = make_traffic_profile(read_percentage=read, write_percentage=100 - read)
            for component_type in ComponentType:
                weight = model.demand_weight(component_type, profile)
                assert 0 < weight <= 1

    def test_write_heavy_mix_loads_queue_more(self, model, make_traffic_profile):
        """Queues carry more traffic as writes grow."""
        reads = make_traffic_profile(read_percentage=90, write_percentage=10)
        writes = make_traffic_profile(read_percentage=10, write_percentage=90)
        assert model.demand_weight(ComponentType.QUEUE, writes) > model.demand_weight(
            ComponentType.QUEUE, reads
        )

    def test_plain_string_tag_matches_enum(self, model, make_traffic_profile):
        """String tags resolve like their enum counterparts."""
        profile = make_traffic_profile()
        assert model.demand_weight("api-gateway", profile) == pytest.approx(0.96)

    def test_unknown_tag_gets_fallback_weight(self, model, make_traffic_profile):
        """Tags outside the closed set fall back to 0.5."""
        assert model.demand_weight("mainframe", make_traffic_profile()) == 0.5
