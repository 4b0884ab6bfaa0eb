"""
Unit Tests for Centralized Logging.

Tests handler wiring, stream selection and source handling.
"""

import json
import logging
import sys
from unittest.mock import MagicMock

import pytest

from kvctl.core.logging import VALID_SOURCES, get_logger, log_with_source, setup_logging


class TestValidSources:
    """Tests for VALID_SOURCES constant."""

    def test_contains_cli_and_client(self):
        assert {"cli", "client"} <= VALID_SOURCES

    def test_is_frozenset(self):
        assert isinstance(VALID_SOURCES, frozenset)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_level_override(self):
        setup_logging(level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_default_level_from_yaml(self):
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_console_handler_writes_to_stderr(self):
        setup_logging()
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].stream is sys.stderr

    def test_console_can_be_disabled(self):
        setup_logging(enable_console=False)
        assert logging.getLogger().handlers == []

    def test_repeated_setup_does_not_stack_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1

    def test_invalid_level_raises(self):
        with pytest.raises(AttributeError):
            setup_logging(level="CHATTY")

    def test_file_handler_writes_json(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        setup_logging(level="INFO", enable_console=False, enable_file_logging=True)

        logger = get_logger("kvctl.tests.file")
        log_with_source(logger, "cli", "info", "Deleted key", key="foo")
        for handler in logging.getLogger().handlers:
            handler.flush()

        log_file = tmp_path / "logs" / "kvctl.jsonl"
        record = json.loads(log_file.read_text().strip().splitlines()[-1])
        assert record["event"] == "Deleted key"
        assert record["source"] == "cli"
        assert record["key"] == "foo"
        assert record["level"] == "info"
        assert "timestamp" in record


class TestLogWithSource:
    """Tests for log_with_source."""

    def test_dispatches_on_level(self):
        logger = MagicMock()
        log_with_source(logger, "client", "debug", "API request", path="/v1/kv/a")
        logger.debug.assert_called_once_with("API request", source="client", path="/v1/kv/a")

    def test_level_is_case_insensitive(self):
        logger = MagicMock()
        log_with_source(logger, "cli", "WARNING", "CAS delete rejected")
        logger.warning.assert_called_once()
