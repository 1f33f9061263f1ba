"""Structured logging for sync runs."""

import logging
import sys
from typing import TextIO

import structlog

from storysync.settings import AppSettings


# Context keys bound for the lifetime of one CLI command
_RUN_CONTEXT_KEYS = ("run_id", "command")


def _renderer(json_format: bool, output: TextIO) -> structlog.types.Processor:
    if json_format:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=output.isatty())


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Route structlog events to a stream.

    Loggers are not cached, so modules holding a module-level logger pick
    up a later reconfiguration (the CLI configures once per command).

    Args:
        level: Minimum level to emit.
        output: Stream receiving rendered events. Never stdout, which
            carries the command's JSON report.
        json_format: Render JSON lines instead of console text.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(json_format, output),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(format="%(message)s", stream=output, level=level)


def level_from_name(name: str) -> int:
    """Resolve a level name such as "debug" to a logging level.

    Unknown names fall back to INFO.
    """
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_from_settings(
    settings: AppSettings,
    json_logs: bool | None = None,
    verbose: bool = False,
    output: TextIO = sys.stderr,
) -> None:
    """Configure logging from settings and command line overrides.

    Args:
        settings: Application settings (STORYSYNC_LOG_LEVEL, STORYSYNC_JSON_LOGS).
        json_logs: Explicit --json-logs/--no-json-logs choice, if given.
        verbose: Force DEBUG level.
        output: Stream receiving rendered events.
    """
    level = level_from_name("DEBUG" if verbose else settings.log_level)
    json_format = settings.json_logs if json_logs is None else json_logs
    configure_logging(level=level, output=output, json_format=json_format)


def bind_run_context(run_id: str, command: str | None = None) -> None:
    """Tag every following event with the run, and the command if given.

    Args:
        run_id: Unique run identifier.
        command: CLI command being run.
    """
    context: dict[str, str] = {"run_id": run_id}
    if command is not None:
        context["command"] = command
    structlog.contextvars.bind_contextvars(**context)


def clear_run_context() -> None:
    """Drop the run tags bound by bind_run_context."""
    structlog.contextvars.unbind_contextvars(*_RUN_CONTEXT_KEYS)
