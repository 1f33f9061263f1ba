"""CLI commands for story dedupe and issue label sync."""

import json
import sys
import uuid
from pathlib import Path

import click
import structlog

from storysync import __version__
from storysync.observability.logging import bind_run_context, configure_from_settings
from storysync.settings import get_settings
from storysync.snapshot import read_snapshot
from storysync.stories.errors import SnapshotError, SyncAbortedError
from storysync.sync.metrics import SyncMetrics
from storysync.sync.runner import IssueLabelSync, unique_stories


logger = structlog.get_logger()

# Exit codes
EXIT_INVALID_INPUT = 1
EXIT_UNKNOWN_STATE = 2


def _echo_json(payload: object) -> None:
    click.echo(json.dumps(payload, indent=2, sort_keys=True))


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """Deduplicate tracker stories and derive issue labels."""


@cli.command()
@click.argument(
    "snapshot_path",
    metavar="SNAPSHOT",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--json-logs/--no-json-logs",
    default=None,
    help="Output logs in JSON format (default from STORYSYNC_JSON_LOGS).",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def labels(snapshot_path: Path, json_logs: bool | None, verbose: bool) -> None:
    """Derive labels for every issue in SNAPSHOT and print a JSON report."""
    settings = get_settings()
    run_id = str(uuid.uuid4())
    configure_from_settings(settings, json_logs=json_logs, verbose=verbose)
    bind_run_context(run_id, command="labels")
    log = logger.bind(component="cli")
    log.info("labels_command_started", snapshot_path=str(snapshot_path))

    try:
        snapshot = read_snapshot(snapshot_path)
    except SnapshotError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_INVALID_INPUT)

    sync = IssueLabelSync(run_id=run_id, settings=settings)
    current_labels = snapshot.current_labels or None

    try:
        result = sync.run(snapshot.issues, current_labels=current_labels)
    except SyncAbortedError as e:
        log.error("labels_command_failed", issue_key=e.issue_key)
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_UNKNOWN_STATE)

    report = result.to_dict()
    report["metrics"] = SyncMetrics.get_instance().to_dict()
    _echo_json(report)


@cli.command()
@click.argument(
    "snapshot_path",
    metavar="SNAPSHOT",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
def dedupe(snapshot_path: Path) -> None:
    """Print canonical and discarded story ids from SNAPSHOT."""
    settings = get_settings()
    configure_from_settings(settings)

    try:
        snapshot = read_snapshot(snapshot_path)
    except SnapshotError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_INVALID_INPUT)

    result = unique_stories(snapshot.issues).dedupe()
    _echo_json(
        {
            "canonical": result.canonical.ids(),
            "discarded": result.discarded.ids(),
            "groups": [
                {
                    "survivor": group.survivor.id,
                    "duplicates": group.duplicates.ids(),
                }
                for group in result.groups
            ],
        }
    )


def main() -> None:
    """Entry point for the storysync command."""
    cli()


if __name__ == "__main__":
    main()
