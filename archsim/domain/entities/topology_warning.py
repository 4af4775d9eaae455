"""Topology warning entity.

Warnings are informational findings about a topology's shape. They never
block a simulation run.
"""

from dataclasses import dataclass
from enum import Enum


class WarningCode(str, Enum):
    """Kinds of topology findings."""

    SPOF = "SPOF"
    DISCONNECTED_NODE = "DISCONNECTED_NODE"
    INVALID_LINK = "INVALID_LINK"


@dataclass(frozen=True)
class TopologyWarning:
    """A single topology finding tied to a node, an edge, or the whole graph."""

    code: WarningCode
    message: str
    node_id: str | None = None
    edge_id: str | None = None
