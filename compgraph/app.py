"""Application runner for compgraph.

Wires one discovery run in dependency order:
config check -> API client -> retry executor -> resolvers -> engine
       -> discovery -> document output

A run either writes a complete document or fails with a non-zero exit; there
is no partial output and nothing is resumed on the next run.
"""

from __future__ import annotations

import httpx

from compgraph.client.api import PlatformApiClient
from compgraph.client.retry import RetryingExecutor
from compgraph.config import validate_config
from compgraph.errors import CompGraphError
from compgraph.graph.discovery import DiscoveryEngine
from compgraph.graph.serialize import write_document
from compgraph.models.config import CompGraphConfig
from compgraph.models.graph import Graph
from compgraph.observability.logging import get_logger, run_context, setup_logging
from compgraph.resolvers.metadata import MetadataResolver
from compgraph.resolvers.references import ReferenceResolver


async def run(
    config: CompGraphConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    executor: RetryingExecutor | None = None,
) -> Graph:
    """Discover the graph for ``config.root_component_id`` and write it out.

    ``transport`` and ``executor`` exist so tests can substitute a fake
    HTTP backend and a retry policy that does not sleep.

    Raises:
        CompGraphError: on invalid config, an unresolvable root or an
        output failure.
    """
    validate_config(config)
    log = get_logger("app")

    with run_context(account_id=config.api.account_id, root_id=config.root_component_id):
        log.info("extraction_starting", output=config.output.path)

        retry = executor or RetryingExecutor.from_config(config.retry)
        async with PlatformApiClient(config.api, transport=transport) as api:
            engine = DiscoveryEngine(
                metadata=MetadataResolver(api, retry),
                references=ReferenceResolver(api, retry),
            )
            graph = await engine.discover(config.root_component_id)

        path = write_document(graph, config.output.path)
        log.info(
            "extraction_complete",
            nodes=graph.node_count,
            edges=graph.edge_count,
            output=str(path),
        )
    return graph


async def main(config: CompGraphConfig) -> Graph:
    """Process entry: configure logging, run discovery, map failures to ``SystemExit(1)``."""
    setup_logging(config.log.level, config.log.format)
    try:
        return await run(config)
    except CompGraphError as exc:
        get_logger("app").error("extraction_failed", error_type=type(exc).__name__, error=str(exc))
        raise SystemExit(1) from exc
    except Exception as exc:
        get_logger("app").critical("extraction_crashed", error=str(exc), exc_info=True)
        raise SystemExit(1) from exc
