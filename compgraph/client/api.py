"""HTTP client for the integration platform's component API."""

from __future__ import annotations

import asyncio
import contextlib
from typing import Any
from urllib.parse import quote

import httpx
import structlog

from compgraph.errors import ResponseFormatError
from compgraph.models.config import ApiConfig

_log = structlog.get_logger(component="client.api")


class PlatformApiClient:
    """Thin async wrapper over httpx bound to a single platform account.

    Every call raises ``httpx.HTTPStatusError`` for non-2xx responses so the
    retry layer can classify it. When ``max_concurrency`` is positive, at most
    that many requests are in flight at once.

    Use as an async context manager, or call ``aclose()`` when done.
    """

    def __init__(
        self,
        config: ApiConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.account_url,
            auth=httpx.BasicAuth(config.username, config.token),
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            timeout=config.timeout_seconds,
            transport=transport,
        )
        self._limiter: asyncio.Semaphore | None = (
            asyncio.Semaphore(config.max_concurrency) if config.max_concurrency > 0 else None
        )

    async def __aenter__(self) -> PlatformApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_component_metadata(self, component_id: str) -> Any:
        """``GET /ComponentMetadata/{id}`` and return the decoded JSON body."""
        return await self._request("GET", f"/ComponentMetadata/{quote(component_id, safe='')}")

    async def query_component_references(self, query: dict[str, Any]) -> Any:
        """``POST /ComponentReference/query`` and return the decoded JSON body."""
        return await self._request("POST", "/ComponentReference/query", json=query)

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        limiter = self._limiter if self._limiter is not None else contextlib.nullcontext()
        async with limiter:
            response = await self._client.request(method, path, **kwargs)
        _log.debug("api_response", method=method, path=path, status=response.status_code)
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseFormatError(f"{method} {path} returned a non-JSON body") from exc
