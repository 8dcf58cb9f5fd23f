"""Tests for CLI logger creation."""

import logging
from pathlib import Path

import orjson
import pytest

from specgraph.utils import create_cli_logger
from specgraph.utils._logging import _log_level_from_string


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SPECGRAPH_DEBUG", raising=False)
    monkeypatch.delenv("SPECGRAPH_LOG_LEVEL", raising=False)


def read_entries(path: Path) -> list[dict[str, object]]:
    return [orjson.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


class TestLogLevelFromString:
    def test_known_levels(self) -> None:
        assert _log_level_from_string("debug") == logging.DEBUG
        assert _log_level_from_string("WARNING") == logging.WARNING

    def test_unknown_level_defaults_to_info(self) -> None:
        assert _log_level_from_string("chatty") == logging.INFO

    def test_debug_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECGRAPH_DEBUG", "1")

        assert _log_level_from_string("error", respect_env=True) == logging.DEBUG

    def test_level_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SPECGRAPH_LOG_LEVEL", "error")

        assert _log_level_from_string("debug", respect_env=True) == logging.ERROR
        assert _log_level_from_string("debug") == logging.DEBUG


class TestCreateCliLogger:
    def test_writes_json_lines_to_file(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "specgraph.log"
        logger = create_cli_logger(level="info", log_file=str(log_file), command="validate")

        logger.info("specs_loaded", count=3)

        entries = read_entries(log_file)
        assert len(entries) == 1
        assert entries[0]["event"] == "specs_loaded"
        assert entries[0]["count"] == 3
        assert entries[0]["command"] == "validate"
        assert entries[0]["level"] == "info"
        assert "timestamp" in entries[0]

    def test_filters_below_level(self, tmp_path: Path) -> None:
        log_file = tmp_path / "specgraph.log"
        logger = create_cli_logger(level="warning", log_file=str(log_file))

        logger.info("hidden")
        logger.warning("shown")

        assert [e["event"] for e in read_entries(log_file)] == ["shown"]

    def test_text_format(self, tmp_path: Path) -> None:
        log_file = tmp_path / "specgraph.log"
        logger = create_cli_logger(level="debug", log_format="text", log_file=str(log_file))

        logger.debug("graph_built", nodes=2)

        text = log_file.read_text(encoding="utf-8")
        assert "graph_built" in text
        assert "nodes=2" in text

    def test_stderr_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        logger = create_cli_logger(level="error")

        logger.error("load_failed")

        assert "load_failed" in capsys.readouterr().err
