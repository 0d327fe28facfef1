"""Unit tests for structlog setup and run-scoped context binding."""

from __future__ import annotations

import json
from collections.abc import Iterator

import pytest
import structlog

from compgraph.observability.logging import get_logger, run_context, setup_logging


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestJsonOutput:
    def test_lines_carry_component_level_and_bound_context(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("info")
        with run_context(root_id="R", account_id="acct-1"):
            get_logger("graph.discovery").info("discovery_finished", nodes=2)

        lines = capsys.readouterr().err.strip().splitlines()
        assert len(lines) == 1
        record = json.loads(lines[0])
        assert record["event"] == "discovery_finished"
        assert record["component"] == "graph.discovery"
        assert record["level"] == "info"
        assert record["root_id"] == "R"
        assert record["nodes"] == 2
        assert "ts" in record

    def test_context_is_unbound_after_block(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("info")
        with run_context(root_id="R"):
            pass
        get_logger("app").info("after")
        record = json.loads(capsys.readouterr().err.strip())
        assert "root_id" not in record

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("warning")
        log = get_logger("client.retry")
        log.info("quiet")
        log.warning("request_retry", attempt=1)
        lines = capsys.readouterr().err.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["request_retry"]


class TestConsoleOutput:
    def test_console_renderer(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging("debug", "console")
        get_logger("app").debug("extraction_starting", output="graph.json")
        err = capsys.readouterr().err
        assert "extraction_starting" in err
        assert "graph.json" in err
