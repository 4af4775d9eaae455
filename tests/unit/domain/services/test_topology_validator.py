"""Unit tests for TopologyValidator."""

import pytest

from archsim.domain.entities.architecture import ComponentType, Edge
from archsim.domain.entities.topology_warning import WarningCode
from archsim.domain.services.topology_validator import (
    TopologyValidator,
    validate_architecture_topology,
)


@pytest.fixture
def validator() -> TopologyValidator:
    return TopologyValidator()


def codes(warnings) -> list[WarningCode]:
    return [w.code for w in warnings]


class TestSinglePointOfFailure:
    """Test SPOF detection."""

    def test_single_replica_database_flagged(self, validator, make_component):
        database = make_component("db", ComponentType.DATABASE, replicas=1, label="Orders DB")

        warnings = validator.validate([database], [])

        spofs = [w for w in warnings if w.code == WarningCode.SPOF]
        assert len(spofs) == 1
        assert spofs[0].node_id == "db"
        assert spofs[0].message == "Orders DB is a single point of failure with only 1 replica."

    def test_redundant_database_not_flagged(self, validator, make_component):
        database = make_component("db", ComponentType.DATABASE, replicas=2)
        assert WarningCode.SPOF not in codes(validator.validate([database], []))

    @pytest.mark.parametrize(
        "component_type",
        [ComponentType.CLIENT, ComponentType.CACHE, ComponentType.CDN, ComponentType.OBJECT_STORE],
    )
    def test_non_critical_kinds_never_flagged(self, validator, make_component, component_type):
        component = make_component("node", component_type, replicas=1)
        assert WarningCode.SPOF not in codes(validator.validate([component], []))


class TestInvalidLinks:
    """Test link validation."""

    def test_edge_to_missing_node(self, validator, make_component):
        client = make_component("client", ComponentType.CLIENT)
        edge = Edge(id="e1", source_id="client", target_id="ghost")

        warnings = [w for w in validator.validate([client], [edge]) if w.code == WarningCode.INVALID_LINK]

        assert len(warnings) == 1
        assert warnings[0].edge_id == "e1"
        assert warnings[0].message == "Edge e1 references missing nodes."

    def test_self_loop(self, validator, make_component):
        service = make_component("svc", replicas=2)
        edge = Edge(id="loop", source_id="svc", target_id="svc")

        warnings = [w for w in validator.validate([service], [edge]) if w.code == WarningCode.INVALID_LINK]

        assert len(warnings) == 1
        assert warnings[0].node_id == "svc"
        assert warnings[0].message == "Edge loop creates a self-loop."

    def test_duplicate_edge(self, validator, make_component):
        client = make_component("client", ComponentType.CLIENT)
        cdn = make_component("cdn", ComponentType.CDN)
        edges = [
            Edge(id="e1", source_id="client", target_id="cdn"),
            Edge(id="e2", source_id="client", target_id="cdn"),
        ]

        warnings = [
            w for w in validator.validate([client, cdn], edges) if w.code == WarningCode.INVALID_LINK
        ]

        assert len(warnings) == 1
        assert warnings[0].edge_id == "e2"


class TestConnectivity:
    """Test disconnected node detection."""

    def test_no_edges(self, validator, make_component):
        components = [
            make_component("client", ComponentType.CLIENT),
            make_component("bucket", ComponentType.OBJECT_STORE),
        ]

        warnings = validator.validate(components, [])

        assert warnings[0].code == WarningCode.DISCONNECTED_NODE
        assert warnings[0].message == "No edges found. Components are disconnected."
        assert warnings[0].node_id is None

    def test_well_formed_chain_is_clean(self, validator, make_component):
        components = [
            make_component("client", ComponentType.CLIENT),
            make_component("lb", ComponentType.LOAD_BALANCER, replicas=2),
            make_component("api", ComponentType.SERVICE, replicas=3),
            make_component("db", ComponentType.DATABASE, replicas=2),
        ]
        edges = [
            Edge(id="e1", source_id="client", target_id="lb"),
            Edge(id="e2", source_id="lb", target_id="api"),
            Edge(id="e3", source_id="api", target_id="db"),
        ]

        assert validator.validate(components, edges) == []

    def test_orphan_and_dead_end(self, validator, make_component):
        components = [
            make_component("client", ComponentType.CLIENT),
            make_component("api", ComponentType.SERVICE, replicas=2, label="API"),
            make_component("cache", ComponentType.CACHE, label="Cache"),
        ]
        edges = [Edge(id="e1", source_id="client", target_id="api")]

        messages = [w.message for w in validator.validate(components, edges)]

        assert "API has no outbound dependency." in messages
        assert "Cache has no inbound dependencies." in messages
        assert "Cache has no outbound dependency." in messages

    def test_empty_topology(self, validator):
        assert validator.validate([], []) == []

    def test_module_level_entry_point(self, make_component):
        database = make_component("db", ComponentType.DATABASE)
        assert validate_architecture_topology([database], []) == TopologyValidator().validate(
            [database], []
        )
