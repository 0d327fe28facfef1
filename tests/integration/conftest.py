"""Shared fixtures for compgraph integration tests.

Provides an in-memory fake of the platform API (metadata + reference query
endpoints) served through ``httpx.MockTransport`` so full extraction runs can
be exercised without network access.
"""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path

import httpx
import pytest

from compgraph.client.retry import RetryingExecutor
from compgraph.models.config import ApiConfig, CompGraphConfig, LogConfig, OutputConfig, RetryConfig

# ---------------------------------------------------------------------------
# Fake platform
# ---------------------------------------------------------------------------


class FakePlatform:
    """Serves ComponentMetadata and ComponentReference/query from dicts.

    ``fail_metadata`` / ``fail_references`` map a component id to a list of
    status codes returned (in order) before the real answer; a status repeated
    more times than the retry budget simulates a permanently flaky endpoint.
    """

    def __init__(self) -> None:
        self.components: dict[str, dict[str, object]] = {}
        self.references: dict[str, list[str]] = {}
        self.fail_metadata: dict[str, list[int]] = {}
        self.fail_references: dict[str, list[int]] = {}
        self.metadata_calls: Counter[str] = Counter()
        self.reference_calls: Counter[str] = Counter()

    def add(
        self,
        component_id: str,
        name: str,
        type_: str = "process",
        version: int = 1,
        refs: list[str] | None = None,
    ) -> None:
        self.components[component_id] = {"name": name, "type": type_, "version": version}
        self.references[component_id] = list(refs or [])

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if request.method == "GET" and "/ComponentMetadata/" in path:
            component_id = path.rsplit("/", 1)[-1]
            self.metadata_calls[component_id] += 1
            pending = self.fail_metadata.get(component_id)
            if pending:
                return httpx.Response(pending.pop(0))
            body = self.components.get(component_id)
            if body is None:
                return httpx.Response(404, json={"message": f"Component {component_id} not found"})
            return httpx.Response(200, json=body)

        if request.method == "POST" and path.endswith("/ComponentReference/query"):
            query = json.loads(request.content)
            nested = query["QueryFilter"]["expression"]["nestedExpression"]
            component_id = nested[0]["argument"][0]
            self.reference_calls[component_id] += 1
            pending = self.fail_references.get(component_id)
            if pending:
                return httpx.Response(pending.pop(0))
            refs = self.references.get(component_id, [])
            if not refs:
                return httpx.Response(200, json={"numberOfResults": 0})
            return httpx.Response(
                200,
                json={
                    "numberOfResults": len(refs),
                    "result": [
                        {
                            "parentComponentId": component_id,
                            "references": [{"componentId": ref, "type": "DEPENDENT"} for ref in refs],
                        }
                    ],
                },
            )

        return httpx.Response(405)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


async def _no_sleep(delay: float) -> None:
    return None


@pytest.fixture()
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture()
def executor() -> RetryingExecutor:
    return RetryingExecutor(max_attempts=5, sleep=_no_sleep)


@pytest.fixture()
def config(tmp_path: Path) -> CompGraphConfig:
    return CompGraphConfig(
        root_component_id="R",
        api=ApiConfig(
            account_id="acct-1",
            username="svc@acct-1",
            token="secret",
            base_url="https://api.example.test/rest/v1",
            max_concurrency=4,
        ),
        retry=RetryConfig(max_attempts=5, base_delay_seconds=0.0, max_jitter_seconds=0.0),
        output=OutputConfig(path=str(tmp_path / "public" / "data" / "graph.json")),
        log=LogConfig(level="debug"),
    )
