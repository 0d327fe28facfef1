"""Remote API access: HTTP transport and retry policy.

Exports:
    PlatformApiClient -- httpx client bound to one platform account.
    RetryingExecutor  -- bounded exponential-backoff retry for 503/504.
"""

from compgraph.client.api import PlatformApiClient
from compgraph.client.retry import TRANSIENT_STATUSES, RetryingExecutor, is_transient

__all__ = [
    "PlatformApiClient",
    "RetryingExecutor",
    "TRANSIENT_STATUSES",
    "is_transient",
]
