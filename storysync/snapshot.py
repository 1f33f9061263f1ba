"""Load story snapshots exported from the tracker."""

import json
from pathlib import Path
from typing import Annotated

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from storysync.stories.errors import SnapshotError
from storysync.stories.models import Story
from storysync.stories.story_set import StorySet


logger = structlog.get_logger()

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class Snapshot(BaseModel):
    """A snapshot document.

    Attributes:
        issues: Stories linked to each issue, keyed by issue.
        current_labels: Labels currently on each issue, where known.
    """

    model_config = ConfigDict(extra="ignore")

    issues: Annotated[dict[str, list[Story]], Field(default_factory=dict)]
    current_labels: Annotated[dict[str, list[str]], Field(default_factory=dict)]


def _format_location(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _read_document(path: Path) -> object:
    """Parse a snapshot file as YAML or JSON depending on its suffix.

    Raises:
        SnapshotError: If the file cannot be read or parsed.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise SnapshotError(str(path), f"cannot read file: {e}") from e

    try:
        content = raw.decode("utf-8")
        if path.suffix.lower() in _YAML_SUFFIXES:
            return yaml.safe_load(content) or {}
        return json.loads(content)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotError(str(path), f"cannot parse file: {e}") from e


def read_snapshot(path: Path) -> Snapshot:
    """Read and validate a snapshot file.

    Args:
        path: Path to a JSON or YAML snapshot.

    Returns:
        Validated Snapshot.

    Raises:
        SnapshotError: If the file is unreadable or fails validation. The
            message names the location of the first invalid value.
    """
    document = _read_document(path)

    try:
        snapshot = Snapshot.model_validate(document)
    except ValidationError as e:
        first = e.errors()[0]
        location = _format_location(first["loc"])
        message = f"{location}: {first['msg']}" if location else first["msg"]
        raise SnapshotError(str(path), message) from e

    logger.debug(
        "snapshot_loaded",
        path=str(path),
        issues=len(snapshot.issues),
        stories=sum(len(stories) for stories in snapshot.issues.values()),
    )
    return snapshot


def load_snapshot(path: Path) -> dict[str, StorySet]:
    """Load the stories linked to each issue.

    Args:
        path: Path to a JSON or YAML snapshot.

    Returns:
        Mapping of issue key to its stories, in file order.

    Raises:
        SnapshotError: If the snapshot is invalid.
    """
    snapshot = read_snapshot(path)
    return {key: StorySet(stories) for key, stories in snapshot.issues.items()}


def load_current_labels(path: Path) -> dict[str, list[str]]:
    """Load the labels currently on each issue.

    Args:
        path: Path to a JSON or YAML snapshot.

    Returns:
        Mapping of issue key to label names. Empty if the snapshot has none.

    Raises:
        SnapshotError: If the snapshot is invalid.
    """
    return read_snapshot(path).current_labels
