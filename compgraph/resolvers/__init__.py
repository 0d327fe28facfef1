"""Metadata and reference resolvers used by the discovery engine."""

from compgraph.resolvers.metadata import NOT_FOUND_STATUSES, MetadataResolver
from compgraph.resolvers.references import ReferenceResolver

__all__ = ["MetadataResolver", "NOT_FOUND_STATUSES", "ReferenceResolver"]
