"""Bounded exponential-backoff retry for transient API failures.

Only 503/504 responses are considered transient. Everything else (4xx, other
5xx, transport errors, decode errors) propagates on the first attempt.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx
import structlog

from compgraph.errors import RetryExhausted
from compgraph.models.config import RetryConfig

_log = structlog.get_logger(component="client.retry")

T = TypeVar("T")

TRANSIENT_STATUSES = frozenset({503, 504})


def is_transient(exc: BaseException) -> bool:
    """True when *exc* is an HTTP status error worth retrying."""
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code in TRANSIENT_STATUSES


class RetryingExecutor:
    """Runs a zero-argument coroutine function with retry on transient failures.

    Args:
        max_attempts: Total attempts including the first one.
        base_delay:   Delay before the second attempt, doubled on each retry.
        max_jitter:   Upper bound of the uniform random delay added to each wait.
        sleep:        Awaitable sleep, injectable for tests.
        jitter:       ``(low, high) -> float`` random source, injectable for tests.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        base_delay: float = 1.0,
        max_jitter: float = 1.0,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        jitter: Callable[[float, float], float] = random.uniform,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._max_attempts = max_attempts
        self._base_delay = base_delay
        self._max_jitter = max_jitter
        self._sleep = sleep
        self._jitter = jitter

    @classmethod
    def from_config(cls, config: RetryConfig) -> RetryingExecutor:
        return cls(
            max_attempts=config.max_attempts,
            base_delay=config.base_delay_seconds,
            max_jitter=config.max_jitter_seconds,
        )

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number *attempt* (1-based)."""
        return self._base_delay * 2 ** (attempt - 1) + self._jitter(0.0, self._max_jitter)

    async def execute(self, request_fn: Callable[[], Awaitable[T]]) -> T:
        """Await ``request_fn()`` until it succeeds or the attempt budget runs out.

        Raises:
            RetryExhausted: every attempt failed with a transient status.
            Exception:      any non-transient failure, unchanged.
        """
        attempt = 0
        while True:
            attempt += 1
            try:
                return await request_fn()
            except httpx.HTTPStatusError as exc:
                if not is_transient(exc):
                    raise
                status = exc.response.status_code
                if attempt >= self._max_attempts:
                    raise RetryExhausted(
                        f"API request failed after {attempt} attempts with status {status}",
                        status=status,
                        attempts=attempt,
                    ) from exc
                delay = self.backoff_delay(attempt)
                _log.warning(
                    "request_retry",
                    status=status,
                    attempt=attempt,
                    max_attempts=self._max_attempts,
                    delay_seconds=round(delay, 3),
                    url=str(exc.request.url),
                )
                await self._sleep(delay)
