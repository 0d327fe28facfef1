"""Component dependency graph discovery and document I/O."""

from compgraph.graph.discovery import DiscoveryEngine
from compgraph.graph.serialize import graph_from_document, load_document, write_document

__all__ = [
    "DiscoveryEngine",
    "graph_from_document",
    "load_document",
    "write_document",
]
