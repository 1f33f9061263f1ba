"""Batch sync of issue labels from linked stories."""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

import structlog

from storysync.labels.derivation import derive_issue_labels
from storysync.labels.reconcile import LabelPlan, plan_label_changes
from storysync.settings import AppSettings
from storysync.stories.errors import SyncAbortedError, UnknownStoryStateError
from storysync.stories.models import Story
from storysync.stories.story_set import StorySet
from storysync.sync.metrics import SyncMetrics


logger = structlog.get_logger()


def group_stories(
    stories: Iterable[Story],
    key: Callable[[Story], str | None],
) -> dict[str, StorySet]:
    """Group stories by a caller-supplied key.

    Stories keep their relative order within each group. Stories whose key
    is None are left out.

    Args:
        stories: Stories to group.
        key: Function returning the group key of a story.

    Returns:
        Mapping of group key to stories.
    """
    grouped: dict[str, list[Story]] = {}
    for story in stories:
        group_key = key(story)
        if group_key is None:
            continue
        grouped.setdefault(group_key, []).append(story)
    return {group_key: StorySet(members) for group_key, members in grouped.items()}


def unique_stories(groups: Mapping[str, Iterable[Story]]) -> StorySet:
    """Flatten issue groups, keeping the first occurrence of each story id.

    A story linked to several issues appears in each of their groups but
    is only deduplicated once.
    """
    seen: dict[int, Story] = {}
    for stories in groups.values():
        for story in stories:
            seen.setdefault(story.id, story)
    return StorySet(seen.values())


@dataclass
class SyncResult:
    """Result of a sync run.

    Attributes:
        issues: Derived labels per issue, keyed in sorted order.
        discarded: Duplicate stories left out of every issue.
        plans: Label changes per issue, for issues with known current labels.
        stories_in: Number of distinct input stories.
        canonical_out: Number of canonical stories.
    """

    issues: dict[str, list[str]] = field(default_factory=dict)
    discarded: StorySet = field(default_factory=StorySet)
    plans: dict[str, LabelPlan] = field(default_factory=dict)
    stories_in: int = 0
    canonical_out: int = 0

    def to_dict(self) -> dict[str, object]:
        """Convert to JSON-serializable dictionary.

        Returns:
            Dictionary suitable for JSON serialization.
        """
        return {
            "issues": {key: list(labels) for key, labels in self.issues.items()},
            "discarded": self.discarded.ids(),
            "plans": {key: plan.to_dict() for key, plan in self.plans.items()},
            "stories_in": self.stories_in,
            "canonical_out": self.canonical_out,
        }


class IssueLabelSync:
    """Derives issue labels for a snapshot of linked stories.

    Duplicates are removed across the whole snapshot first, then each
    issue is labeled from its canonical stories. A story in an unknown
    state aborts the whole batch.
    """

    def __init__(
        self,
        run_id: str,
        settings: AppSettings | None = None,
        metrics: SyncMetrics | None = None,
    ) -> None:
        """Initialize the sync.

        Args:
            run_id: Run identifier for logging.
            settings: Application settings.
            metrics: Optional metrics instance for dependency injection.
        """
        self._run_id = run_id
        self._settings = settings or AppSettings()
        self._metrics = metrics or SyncMetrics.get_instance()
        self._log = logger.bind(
            component="sync",
            run_id=run_id,
        )

    def run(
        self,
        snapshot: Mapping[str, Iterable[Story]],
        current_labels: Mapping[str, Iterable[str]] | None = None,
    ) -> SyncResult:
        """Derive labels for every issue in a snapshot.

        Args:
            snapshot: Stories linked to each issue, keyed by issue.
            current_labels: Labels currently on each issue. Issues listed
                here get a LabelPlan.

        Returns:
            SyncResult with labels per issue.

        Raises:
            SyncAbortedError: If any story has an unknown state. The
                original UnknownStoryStateError is chained as the cause.
        """
        groups = {key: list(stories) for key, stories in snapshot.items()}
        all_stories = unique_stories(groups)

        self._log.info(
            "sync_started",
            issues_in=len(groups),
            stories_in=len(all_stories),
        )

        dedupe_result = all_stories.dedupe()
        canonical_ids = set(dedupe_result.canonical.ids())
        self._metrics.record_dedupe(
            stories_in=dedupe_result.stories_in,
            canonical=len(dedupe_result.canonical),
            discarded=dedupe_result.duplicates_total,
        )

        for group in dedupe_result.groups:
            self._log.debug(
                "duplicate_stories_discarded",
                survivor_id=group.survivor.id,
                duplicate_ids=group.duplicates.ids(),
                story_name=group.key.name,
            )

        self._log.info(
            "dedupe_complete",
            canonical_out=len(dedupe_result.canonical),
            duplicates_discarded=dedupe_result.duplicates_total,
        )

        result = SyncResult(
            discarded=dedupe_result.discarded,
            stories_in=dedupe_result.stories_in,
            canonical_out=len(dedupe_result.canonical),
        )

        for issue_key in sorted(groups):
            stories = StorySet(
                story for story in groups[issue_key] if story.id in canonical_ids
            )
            labels = self._derive(issue_key, stories)
            result.issues[issue_key] = labels

            if current_labels is not None and issue_key in current_labels:
                plan = plan_label_changes(
                    current_labels[issue_key],
                    labels,
                    remove_stale=self._settings.remove_stale_labels,
                )
                result.plans[issue_key] = plan
                if not plan.is_noop:
                    self._log.info(
                        "issue_label_changes_planned",
                        issue_key=issue_key,
                        to_add=plan.to_add,
                        to_remove=plan.to_remove,
                    )

        self._log.info("sync_complete", issues_labeled=len(result.issues))
        return result

    def _derive(self, issue_key: str, stories: StorySet) -> list[str]:
        """Derive labels for one issue.

        Args:
            issue_key: Issue being labeled.
            stories: Canonical stories linked to the issue.

        Returns:
            Derived labels.

        Raises:
            SyncAbortedError: If a story has an unknown state.
        """
        try:
            labels = derive_issue_labels(stories)
        except UnknownStoryStateError as e:
            self._metrics.record_unknown_state()
            self._log.error(
                "unknown_story_state",
                issue_key=issue_key,
                **e.to_dict(),
            )
            self._log.error("sync_aborted", issue_key=issue_key, reason=str(e))
            raise SyncAbortedError(issue_key, str(e)) from e

        self._metrics.record_issue_labeled()
        self._log.debug(
            "issue_labels_derived",
            issue_key=issue_key,
            story_ids=stories.ids(),
            labels=labels,
        )
        return labels
