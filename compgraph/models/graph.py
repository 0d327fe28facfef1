"""Data structures for the discovered component graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ResourceId = str


@dataclass(frozen=True)
class ResourceMetadata:
    """Descriptive attributes of a remote component."""

    id: ResourceId
    display_name: str
    category: str
    version: int | None = None  # required for the reference lookup

    def to_node(self) -> Node:
        """Project the metadata into graph form (version is dropped)."""
        return Node(id=self.id, display_name=self.display_name, category=self.category)


@dataclass(frozen=True)
class Node:
    """A resolved component in the graph."""

    id: ResourceId
    display_name: str
    category: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "name": self.display_name, "type": self.category}


@dataclass(frozen=True)
class Edge:
    """A directed reference from a parent component to one of its dependencies."""

    source_id: ResourceId
    target_id: ResourceId

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source_id, "target": self.target_id}


@dataclass
class Graph:
    """Result of one discovery run.

    ``nodes`` keeps insertion (discovery) order. ``edges`` may point at ids
    missing from ``nodes`` when the target could not be resolved.
    """

    nodes: dict[ResourceId, Node] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def dangling_edges(self) -> list[Edge]:
        """Edges whose target never made it into the node set."""
        return [edge for edge in self.edges if edge.target_id not in self.nodes]

    def to_document(self) -> dict[str, Any]:
        """Serialise to the document shape read by the graph renderer."""
        return {
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "edges": [edge.to_dict() for edge in self.edges],
        }
