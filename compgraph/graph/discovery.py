"""Concurrent, deduplicated discovery of a component dependency graph.

One ``discover()`` call owns one run: a claimed-id set, the node mapping and
the edge list. Every visit is a task in a single TaskGroup opened by the run,
so the call returns only once the whole transitive closure has settled.

Deduplication relies on asyncio's cooperative scheduling: an id is checked
and claimed with no ``await`` in between, so two parents reaching the same
unseen id can never both fetch it. Claiming happens before the metadata
lookup, and the node is recorded before its references are fetched, which is
what keeps cycles from recursing forever.
"""

from __future__ import annotations

import asyncio
import time
from typing import Protocol

import httpx
import structlog

from compgraph.errors import ApiError, DiscoveryError, ResponseFormatError
from compgraph.models.graph import Edge, Graph, Node, ResourceId, ResourceMetadata

_log = structlog.get_logger(component="graph.discovery")

# Failures a metadata lookup is expected to produce; anything else is a bug
# and aborts the run.
_LOOKUP_ERRORS = (ApiError, ResponseFormatError, httpx.HTTPError)


class MetadataLookup(Protocol):
    async def resolve(self, component_id: ResourceId) -> ResourceMetadata | None: ...


class ReferenceLookup(Protocol):
    async def resolve(self, component_id: ResourceId, version: int) -> list[ResourceId]: ...


class DiscoveryEngine:
    """Builds the graph reachable from a root component."""

    def __init__(self, metadata: MetadataLookup, references: ReferenceLookup) -> None:
        self._metadata = metadata
        self._references = references

    async def discover(self, root_id: ResourceId) -> Graph:
        """Traverse every component reachable from *root_id*.

        Raises:
            DiscoveryError: the root does not exist or its lookup failed.
        """
        run = _DiscoveryRun(self._metadata, self._references)
        started = time.monotonic()
        _log.info("discovery_started", root_id=root_id)
        graph = await run.execute(root_id)
        _log.info(
            "discovery_finished",
            root_id=root_id,
            nodes=graph.node_count,
            edges=graph.edge_count,
            dangling_edges=len(graph.dangling_edges()),
            elapsed_ms=int((time.monotonic() - started) * 1000),
        )
        return graph


class _DiscoveryRun:
    """Mutable state of a single traversal. Not reused across runs."""

    def __init__(self, metadata: MetadataLookup, references: ReferenceLookup) -> None:
        self._metadata = metadata
        self._references = references
        self._claimed: set[ResourceId] = set()
        self._nodes: dict[ResourceId, Node] = {}
        self._edges: list[Edge] = []
        self._tasks: asyncio.TaskGroup | None = None

    async def execute(self, root_id: ResourceId) -> Graph:
        self._claimed.add(root_id)
        try:
            root = await self._metadata.resolve(root_id)
        except _LOOKUP_ERRORS as exc:
            raise DiscoveryError(f"Root component {root_id} could not be resolved: {exc}", root_id) from exc
        if root is None:
            raise DiscoveryError(f"Root component {root_id} was not found", root_id)

        async with asyncio.TaskGroup() as tasks:
            self._tasks = tasks
            tasks.create_task(self._expand(root))
        self._tasks = None

        return Graph(nodes=dict(self._nodes), edges=list(self._edges))

    def _spawn(self, component_id: ResourceId) -> None:
        """Schedule a visit unless *component_id* was already claimed."""
        if component_id in self._claimed:
            return
        self._claimed.add(component_id)
        assert self._tasks is not None
        self._tasks.create_task(self._visit(component_id), name=f"visit:{component_id}")

    async def _visit(self, component_id: ResourceId) -> None:
        try:
            metadata = await self._metadata.resolve(component_id)
        except _LOOKUP_ERRORS as exc:
            _log.error(
                "component_lookup_failed",
                component_id=component_id,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return
        if metadata is None:
            return
        await self._expand(metadata)

    async def _expand(self, metadata: ResourceMetadata) -> None:
        component_id = metadata.id
        self._nodes[component_id] = metadata.to_node()
        _log.debug("component_resolved", component_id=component_id, type=metadata.category)

        if metadata.version is None:
            _log.warning("component_version_missing", component_id=component_id)
            return

        for ref_id in await self._references.resolve(component_id, metadata.version):
            self._edges.append(Edge(source_id=component_id, target_id=ref_id))
            self._spawn(ref_id)
