"""Integration tests for snapshot loading, dedupe and label sync."""

import json
from pathlib import Path

import pytest

from storysync.snapshot import read_snapshot
from storysync.stories.errors import SyncAbortedError, UnknownStoryStateError
from storysync.stories.story_set import StorySet
from storysync.sync.metrics import SyncMetrics
from storysync.sync.runner import IssueLabelSync


def create_tracker_story(  # noqa: PLR0913
    story_id: int,
    name: str,
    story_type: str,
    state: str,
    labels: list[str] | None = None,
    accepted_at: str | None = None,
) -> dict[str, object]:
    """Create a story payload shaped like the tracker API returns it."""
    payload: dict[str, object] = {
        "kind": "story",
        "id": story_id,
        "project_id": 1001,
        "name": name,
        "description": f"Description of {name}",
        "story_type": story_type,
        "current_state": state,
        "url": f"https://tracker.example.com/story/show/{story_id}",
        "labels": [
            {"id": index, "project_id": 1001, "kind": "label", "name": label}
            for index, label in enumerate(labels or [], start=1)
        ],
    }
    if accepted_at is not None:
        payload["accepted_at"] = accepted_at
    return payload


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    """Write a snapshot covering every status label."""
    document = {
        "issues": {
            "org/repo#10": [
                create_tracker_story(
                    101, "Add search", "feature", "accepted",
                    accepted_at="2017-06-10T12:00:00Z",
                ),
                create_tracker_story(102, "Search docs", "chore", "accepted"),
            ],
            "org/repo#11": [
                create_tracker_story(110, "Crash on save", "bug", "started", ["has-pr"]),
                create_tracker_story(111, "Crash follow-up", "chore", "unscheduled"),
            ],
            "org/repo#12": [
                create_tracker_story(120, "Triage", "chore", "unstarted"),
                create_tracker_story(121, "Triage more", "chore", "unstarted"),
                # Re-imported copy of 120
                create_tracker_story(150, "Triage", "chore", "started"),
            ],
            "org/repo#13": [
                create_tracker_story(130, "Idea", "chore", "unscheduled"),
                create_tracker_story(131, "Idea 2", "chore", "unscheduled"),
                create_tracker_story(132, "Old idea", "chore", "accepted"),
            ],
        },
        "current_labels": {
            "org/repo#11": ["bug", "scheduled", "discuss"],
            "org/repo#13": ["unscheduled"],
        },
    }
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


class TestIssueLabelSyncIntegration:
    """End-to-end tests from snapshot file to derived labels."""

    def setup_method(self) -> None:
        """Reset metrics before each test."""
        SyncMetrics.reset_instance()

    def test_full_sync(self, snapshot_path: Path) -> None:
        """Test every issue gets the expected labels."""
        snapshot = read_snapshot(snapshot_path)
        result = IssueLabelSync("integration-run").run(
            snapshot.issues, current_labels=snapshot.current_labels
        )

        assert result.issues == {
            "org/repo#10": ["enhancement"],
            "org/repo#11": ["bug", "in-flight"],
            "org/repo#12": ["scheduled"],
            "org/repo#13": ["unscheduled"],
        }
        assert result.discarded.ids() == [150]

        plan = result.plans["org/repo#11"]
        assert plan.to_add == ["in-flight"]
        assert plan.to_remove == ["scheduled"]
        assert result.plans["org/repo#13"].is_noop

        metrics = SyncMetrics.get_instance()
        assert metrics.issues_labeled == 4
        assert metrics.duplicates_discarded == 1

    def test_story_queries_on_loaded_snapshot(self, snapshot_path: Path) -> None:
        """Test queries over stories loaded from the tracker format."""
        issues = read_snapshot(snapshot_path).issues

        accepted = StorySet(issues["org/repo#10"])
        assert accepted.all_accepted()
        assert accepted.last_accepted().isoformat() == "2017-06-10T12:00:00+00:00"

        in_flight = StorySet(issues["org/repo#11"])
        assert in_flight.has_pr()
        assert in_flight.with_label("HAS-PR").ids() == [110]

        assert StorySet(issues["org/repo#13"]).untriaged()

    def test_unknown_state_aborts(self, tmp_path: Path) -> None:
        """Test an unknown state stops the whole batch."""
        path = tmp_path / "snapshot.json"
        path.write_text(
            json.dumps(
                {
                    "issues": {
                        "org/repo#1": [create_tracker_story(1, "A", "bug", "planned")],
                        "org/repo#2": [create_tracker_story(2, "B", "bug", "icebox")],
                    }
                }
            ),
            encoding="utf-8",
        )
        snapshot = read_snapshot(path)

        with pytest.raises(SyncAbortedError) as exc_info:
            IssueLabelSync("integration-run").run(snapshot.issues)

        assert exc_info.value.issue_key == "org/repo#2"
        cause = exc_info.value.__cause__
        assert isinstance(cause, UnknownStoryStateError)
        assert cause.state == "icebox"
