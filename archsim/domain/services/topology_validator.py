"""Topology validation service.

Flags single points of failure, broken links and disconnected nodes. The
findings are advisory and never block a simulation run.
"""

from collections.abc import Sequence

from archsim.domain.entities.architecture import Component, ComponentType, Edge
from archsim.domain.entities.topology_warning import TopologyWarning, WarningCode


class TopologyValidator:
    """Inspects the shape of an architecture graph.

    Rules:
    - SPOF: load balancers, gateways, services, databases and queues need
      at least two replicas
    - INVALID_LINK: edges to missing nodes, self-loops and duplicate edges
    - DISCONNECTED_NODE: graphs without edges, non-client nodes without
      inbound edges, and non-storage nodes without outbound edges
    """

    SPOF_TYPES: frozenset[ComponentType] = frozenset(
        {
            ComponentType.LOAD_BALANCER,
            ComponentType.API_GATEWAY,
            ComponentType.SERVICE,
            ComponentType.DATABASE,
            ComponentType.QUEUE,
        }
    )
    SINK_TYPES: frozenset[ComponentType] = frozenset(
        {ComponentType.DATABASE, ComponentType.OBJECT_STORE}
    )
    MIN_REDUNDANT_REPLICAS: int = 2

    def validate(
        self,
        components: Sequence[Component],
        edges: Sequence[Edge],
    ) -> list[TopologyWarning]:
        """Validate a topology.

        Args:
            components: Components of the graph
            edges: Directed edges of the graph

        Returns:
            Warnings in detection order (SPOFs, links, connectivity)
        """
        warnings: list[TopologyWarning] = []
        component_ids = {c.id for c in components}
        outgoing: dict[str, int] = {c.id: 0 for c in components}
        incoming: dict[str, int] = {c.id: 0 for c in components}
        seen_links: set[tuple[str, str]] = set()

        for component in components:
            if (
                component.type in self.SPOF_TYPES
                and component.scaling.replicas < self.MIN_REDUNDANT_REPLICAS
            ):
                warnings.append(
                    TopologyWarning(
                        code=WarningCode.SPOF,
                        message=(
                            f"{component.label} is a single point of failure with only "
                            f"{component.scaling.replicas} replica."
                        ),
                        node_id=component.id,
                    )
                )

        for edge in edges:
            if edge.source_id not in component_ids or edge.target_id not in component_ids:
                warnings.append(
                    TopologyWarning(
                        code=WarningCode.INVALID_LINK,
                        message=f"Edge {edge.id} references missing nodes.",
                        edge_id=edge.id,
                    )
                )
                continue

            if edge.source_id == edge.target_id:
                warnings.append(
                    TopologyWarning(
                        code=WarningCode.INVALID_LINK,
                        message=f"Edge {edge.id} creates a self-loop.",
                        node_id=edge.source_id,
                        edge_id=edge.id,
                    )
                )
                continue

            link = (edge.source_id, edge.target_id)
            if link in seen_links:
                warnings.append(
                    TopologyWarning(
                        code=WarningCode.INVALID_LINK,
                        message=f"Duplicate edge between {edge.source_id} and {edge.target_id}.",
                        edge_id=edge.id,
                    )
                )
                continue
            seen_links.add(link)

            outgoing[edge.source_id] += 1
            incoming[edge.target_id] += 1

        if len(components) > 1 and not edges:
            warnings.append(
                TopologyWarning(
                    code=WarningCode.DISCONNECTED_NODE,
                    message="No edges found. Components are disconnected.",
                )
            )

        for component in components:
            if component.type != ComponentType.CLIENT and incoming[component.id] == 0:
                warnings.append(
                    TopologyWarning(
                        code=WarningCode.DISCONNECTED_NODE,
                        message=f"{component.label} has no inbound dependencies.",
                        node_id=component.id,
                    )
                )

            if component.type not in self.SINK_TYPES and outgoing[component.id] == 0:
                warnings.append(
                    TopologyWarning(
                        code=WarningCode.DISCONNECTED_NODE,
                        message=f"{component.label} has no outbound dependency.",
                        node_id=component.id,
                    )
                )

        return warnings


_default_validator = TopologyValidator()


def validate_architecture_topology(
    components: Sequence[Component],
    edges: Sequence[Edge],
) -> list[TopologyWarning]:
    """Validate a topology with the default validator."""
    return _default_validator.validate(components, edges)
