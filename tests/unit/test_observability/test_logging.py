"""Unit tests for logging configuration."""

import io
import json
import logging

import structlog

from storysync.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_from_settings,
    configure_logging,
    level_from_name,
)
from storysync.settings import AppSettings


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def teardown_method(self) -> None:
        """Restore defaults after each test."""
        clear_run_context()
        structlog.reset_defaults()

    def test_json_output_includes_run_id(self) -> None:
        """Test JSON logs carry the bound run id."""
        output = io.StringIO()
        configure_logging(output=output, json_format=True)
        bind_run_context("run-42")

        structlog.get_logger().info("sync_started", issues_in=3)

        record = json.loads(output.getvalue().strip().splitlines()[-1])
        assert record["event"] == "sync_started"
        assert record["run_id"] == "run-42"
        assert record["issues_in"] == 3
        assert record["level"] == "info"

    def test_level_filters(self) -> None:
        """Test messages below the level are dropped."""
        output = io.StringIO()
        configure_logging(level=logging.WARNING, output=output)
        structlog.get_logger().info("quiet")
        assert output.getvalue() == ""


class TestLevelFromName:
    """Tests for level_from_name function."""

    def test_known_names(self) -> None:
        """Test level names resolve case-insensitively."""
        assert level_from_name("debug") == logging.DEBUG
        assert level_from_name("WARNING") == logging.WARNING

    def test_unknown_falls_back_to_info(self) -> None:
        """Test unknown names give INFO."""
        assert level_from_name("chatty") == logging.INFO


class TestConfigureFromSettings:
    """Tests for configure_from_settings and run context."""

    def teardown_method(self) -> None:
        """Restore defaults after each test."""
        clear_run_context()
        structlog.reset_defaults()

    def test_settings_level_and_format(self) -> None:
        """Test level and format come from settings."""
        output = io.StringIO()
        settings = AppSettings(_env_file=None, log_level="WARNING", json_logs=True)
        configure_from_settings(settings, output=output)

        structlog.get_logger().info("dropped")
        structlog.get_logger().warning("kept")

        lines = output.getvalue().strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["kept"]

    def test_overrides(self) -> None:
        """Test --verbose and --no-json-logs win over settings."""
        output = io.StringIO()
        settings = AppSettings(_env_file=None, log_level="ERROR", json_logs=True)
        configure_from_settings(settings, json_logs=False, verbose=True, output=output)

        structlog.get_logger().debug("detail_logged")

        text = output.getvalue()
        assert "detail_logged" in text
        assert not text.lstrip().startswith("{")

    def test_command_bound_and_cleared(self) -> None:
        """Test the command tag is bound with the run and cleared with it."""
        output = io.StringIO()
        configure_logging(output=output)
        bind_run_context("run-7", command="labels")
        structlog.get_logger().info("first")
        clear_run_context()
        structlog.get_logger().info("second")

        first, second = (
            json.loads(line) for line in output.getvalue().strip().splitlines()
        )
        assert first["run_id"] == "run-7"
        assert first["command"] == "labels"
        assert "run_id" not in second
        assert "command" not in second
