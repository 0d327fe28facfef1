"""Component reference lookup.

Failures here never propagate: a component whose references cannot be fetched
stays in the graph as a leaf so the rest of the traversal can continue.
"""

from __future__ import annotations

import structlog

from compgraph.client.api import PlatformApiClient
from compgraph.client.retry import RetryingExecutor
from compgraph.models.api import ReferenceQueryResponse, build_reference_query
from compgraph.models.graph import ResourceId

_log = structlog.get_logger(component="resolvers.references")


class ReferenceResolver:
    """Lists the components directly referenced by one component version."""

    def __init__(self, api: PlatformApiClient, executor: RetryingExecutor) -> None:
        self._api = api
        self._executor = executor

    async def resolve(self, component_id: ResourceId, version: int) -> list[ResourceId]:
        """Return referenced ids in response order; ``[]`` on any failure."""
        query = build_reference_query(component_id, version)
        try:
            body = await self._executor.execute(lambda: self._api.query_component_references(query))
            return ReferenceQueryResponse.from_json(body).referenced_ids()
        except Exception as exc:
            _log.error(
                "reference_lookup_failed",
                component_id=component_id,
                version=version,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return []
