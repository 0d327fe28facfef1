"""Configuration loading from environment variables."""

from __future__ import annotations

import os

from compgraph.errors import ConfigError
from compgraph.models.config import (
    DEFAULT_API_BASE_URL,
    ApiConfig,
    CompGraphConfig,
    LogConfig,
    OutputConfig,
    RetryConfig,
)
from compgraph.observability.logging import LOG_FORMATS

_REQUIRED = {
    "COMPGRAPH_ACCOUNT_ID": lambda c: c.api.account_id,
    "COMPGRAPH_USERNAME": lambda c: c.api.username,
    "COMPGRAPH_TOKEN": lambda c: c.api.token,
    "COMPGRAPH_ROOT_COMPONENT_ID": lambda c: c.root_component_id,
}


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"COMPGRAPH_{key}", default)


def _env_int(key: str, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    raw = _env(key, str(default))
    try:
        val = int(raw)
    except ValueError as exc:
        raise ConfigError(f"COMPGRAPH_{key} must be an integer, got {raw!r}") from exc
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_float(key: str, default: float, min_val: float | None = None, max_val: float | None = None) -> float:
    raw = _env(key, str(default))
    try:
        val = float(raw)
    except ValueError as exc:
        raise ConfigError(f"COMPGRAPH_{key} must be a number, got {raw!r}") from exc
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ConfigError(f"Invalid log level: {value}. Must be one of {sorted(valid)}")
    return value.lower()


def validate_log_format(value: str) -> str:
    if value.lower() not in LOG_FORMATS:
        raise ConfigError(f"Invalid log format: {value}. Must be one of {sorted(LOG_FORMATS)}")
    return value.lower()


def load_config() -> CompGraphConfig:
    """Load configuration from COMPGRAPH_* environment variables.

    Required values are not checked here; call validate_config() once any
    command-line overrides have been applied.
    """
    return CompGraphConfig(
        root_component_id=_env("ROOT_COMPONENT_ID").strip(),
        api=ApiConfig(
            account_id=_env("ACCOUNT_ID").strip(),
            username=_env("USERNAME").strip(),
            token=_env("TOKEN"),
            base_url=_env("API_BASE_URL", DEFAULT_API_BASE_URL),
            timeout_seconds=_env_float("HTTP_TIMEOUT", 30.0, min_val=1.0, max_val=300.0),
            max_concurrency=_env_int("MAX_CONCURRENCY", 8, min_val=0, max_val=64),
        ),
        retry=RetryConfig(
            max_attempts=_env_int("MAX_RETRIES", 5, min_val=1, max_val=10),
            base_delay_seconds=_env_float("RETRY_BASE_DELAY", 1.0, min_val=0.0),
            max_jitter_seconds=_env_float("RETRY_MAX_JITTER", 1.0, min_val=0.0),
        ),
        output=OutputConfig(
            path=_env("OUTPUT_FILE", "public/data/graph.json"),
        ),
        log=LogConfig(
            level=validate_log_level(_env("LOG_LEVEL", "info")),
            format=validate_log_format(_env("LOG_FORMAT", "json")),
        ),
    )


def validate_config(config: CompGraphConfig) -> CompGraphConfig:
    """Raise ConfigError naming every required value that is missing."""
    missing = [name for name, getter in _REQUIRED.items() if not getter(config)]
    if missing:
        raise ConfigError(f"Missing required configuration: {', '.join(missing)}")
    if not config.output.path:
        raise ConfigError("Output path must not be empty")
    return config
