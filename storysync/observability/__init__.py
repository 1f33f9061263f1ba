"""Observability module for logging."""

from storysync.observability.logging import (
    bind_run_context,
    clear_run_context,
    configure_from_settings,
    configure_logging,
    level_from_name,
)


__all__ = [
    "bind_run_context",
    "clear_run_context",
    "configure_from_settings",
    "configure_logging",
    "level_from_name",
]
