"""Core data structures for compgraph."""

from compgraph.models.api import (
    ComponentMetadataPayload,
    ComponentReference,
    ReferenceGroup,
    ReferenceQueryResponse,
    build_reference_query,
)
from compgraph.models.config import CompGraphConfig
from compgraph.models.graph import Edge, Graph, Node, ResourceId, ResourceMetadata

__all__ = [
    "CompGraphConfig",
    "ComponentMetadataPayload",
    "ComponentReference",
    "Edge",
    "Graph",
    "Node",
    "ReferenceGroup",
    "ReferenceQueryResponse",
    "ResourceId",
    "ResourceMetadata",
    "build_reference_query",
]
