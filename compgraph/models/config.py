"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_API_BASE_URL = "https://api.boomi.com/api/rest/v1"


@dataclass
class ApiConfig:
    """Platform API connection configuration."""

    account_id: str = ""
    username: str = ""
    token: str = ""
    base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = 30.0
    max_concurrency: int = 8  # 0 disables the in-flight request cap

    @property
    def account_url(self) -> str:
        """Base URL scoped to the configured account."""
        return f"{self.base_url.rstrip('/')}/{self.account_id}"


@dataclass
class RetryConfig:
    """Backoff policy for transient API failures."""

    max_attempts: int = 5
    base_delay_seconds: float = 1.0
    max_jitter_seconds: float = 1.0


@dataclass
class OutputConfig:
    """Graph document output configuration."""

    path: str = "public/data/graph.json"


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"
    format: str = "json"  # json | console


@dataclass
class CompGraphConfig:
    """Top-level compgraph configuration."""

    root_component_id: str = ""
    api: ApiConfig = field(default_factory=ApiConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log: LogConfig = field(default_factory=LogConfig)
