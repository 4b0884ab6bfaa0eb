"""Unit tests for the CLI entry point."""

import sys
from unittest.mock import patch

from typer.testing import CliRunner

from kvctl.cli.app import app, main

runner = CliRunner()


class TestHelp:
    """Tests for help output."""

    def test_main_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "kv" in result.stdout
        assert "snapshot" in result.stdout

    def test_kv_export_help(self) -> None:
        result = runner.invoke(app, ["kv", "export", "--help"])
        assert result.exit_code == 0
        assert "Exports a tree from the KV store as JSON" in result.stdout

    def test_kv_delete_help(self) -> None:
        result = runner.invoke(app, ["kv", "delete", "--help"])
        assert result.exit_code == 0
        assert "Removes data from the KV store" in result.stdout
        assert "--modify-index" in result.stdout

    def test_snapshot_restore_help(self) -> None:
        result = runner.invoke(app, ["snapshot", "restore", "--help"])
        assert result.exit_code == 0
        assert "Restores snapshot of server state" in result.stdout


class TestLoggingFlags:
    """Tests for --verbose and --debug."""

    def test_default_level_is_warning(self) -> None:
        with patch("kvctl.core.logging.setup_logging") as setup:
            runner.invoke(app, ["kv", "export", "--help"])
            runner.invoke(app, ["kv", "delete"])
        setup.assert_called_with(level=None)

    def test_verbose(self) -> None:
        with patch("kvctl.core.logging.setup_logging") as setup:
            runner.invoke(app, ["-v", "kv", "delete"])
        setup.assert_called_once_with(level="INFO")

    def test_debug(self) -> None:
        with patch("kvctl.core.logging.setup_logging") as setup:
            runner.invoke(app, ["--debug", "kv", "delete"])
        setup.assert_called_once_with(level="DEBUG")

    def test_invalid_configuration_exits_1(self) -> None:
        with patch("kvctl.core.logging.setup_logging", side_effect=ValueError("Invalid configuration in logging.yaml")):
            result = runner.invoke(app, ["kv", "delete", "foo"])
        assert result.exit_code == 1
        assert "Error loading configuration" in result.output


class TestMain:
    """Tests for the console script wrapper."""

    def test_usage_error_exits_1(self, monkeypatch) -> None:
        monkeypatch.setattr(sys, "argv", ["kvctl", "kv", "delete", "--bogus", "foo"])
        assert main() == 1

    def test_negative_modify_index_exits_1(self, monkeypatch) -> None:
        monkeypatch.setattr(sys, "argv", ["kvctl", "kv", "delete", "--cas", "--modify-index=-1", "foo"])
        assert main() == 1

    def test_command_exit_code_is_returned(self, monkeypatch) -> None:
        monkeypatch.setattr(sys, "argv", ["kvctl", "kv", "delete"])
        assert main() == 1

    def test_help_exits_0(self, monkeypatch) -> None:
        monkeypatch.setattr(sys, "argv", ["kvctl", "--help"])
        assert main() == 0

    def test_modify_index_overflow_exits_1(self, monkeypatch) -> None:
        monkeypatch.setattr(
            sys, "argv",
            ["kvctl", "kv", "delete", "--cas", "--modify-index", "18446744073709551616", "foo"],
        )
        assert main() == 1
