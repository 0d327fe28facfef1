"""Exception hierarchy for compgraph."""

from __future__ import annotations


class CompGraphError(Exception):
    """Base class for all compgraph errors."""


class ConfigError(CompGraphError):
    """Raised when required configuration is missing or invalid."""


class ApiError(CompGraphError):
    """A remote API call failed.

    Attributes:
        status:   HTTP status of the last response, if one was received.
        attempts: Number of attempts made before giving up, if known.
    """

    def __init__(self, message: str, status: int | None = None, attempts: int | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.attempts = attempts


class RetryExhausted(ApiError):
    """Raised when every attempt failed with a transient status."""


class ResponseFormatError(CompGraphError):
    """The remote payload did not have the expected shape."""


class DiscoveryError(CompGraphError):
    """The traversal could not start because the root component is unresolvable."""

    def __init__(self, message: str, component_id: str) -> None:
        super().__init__(message)
        self.component_id = component_id


class OutputError(CompGraphError):
    """The graph document could not be written or read."""
