"""Component metadata lookup."""

from __future__ import annotations

import httpx
import structlog

from compgraph.client.api import PlatformApiClient
from compgraph.client.retry import RetryingExecutor
from compgraph.models.api import ComponentMetadataPayload
from compgraph.models.graph import ResourceId, ResourceMetadata

_log = structlog.get_logger(component="resolvers.metadata")

# The platform answers 400 for ids it cannot parse or that belong to another account.
NOT_FOUND_STATUSES = frozenset({400, 404})


class MetadataResolver:
    """Resolves a component id to its name, type and current version."""

    def __init__(self, api: PlatformApiClient, executor: RetryingExecutor) -> None:
        self._api = api
        self._executor = executor

    async def resolve(self, component_id: ResourceId) -> ResourceMetadata | None:
        """Return the metadata for *component_id*, or None if it does not exist.

        Raises:
            RetryExhausted, httpx.HTTPError, ResponseFormatError: for any
            failure other than not-found.
        """
        try:
            body = await self._executor.execute(lambda: self._api.get_component_metadata(component_id))
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code in NOT_FOUND_STATUSES:
                _log.warning(
                    "component_not_found",
                    component_id=component_id,
                    status=exc.response.status_code,
                )
                return None
            raise
        return ComponentMetadataPayload.from_json(body).to_metadata(component_id)
