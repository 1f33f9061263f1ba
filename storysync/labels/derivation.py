"""Derive issue labels from the stories linked to an issue."""

from collections.abc import Iterable

from storysync.labels.constants import IssueLabel
from storysync.stories.errors import UnknownStoryStateError
from storysync.stories.models import Story, StoryState, StoryType
from storysync.stories.story_set import StorySet


# States that put the whole issue in flight as soon as one story has them
_IN_FLIGHT_STATES = frozenset(
    {
        StoryState.STARTED.value,
        StoryState.FINISHED.value,
        StoryState.DELIVERED.value,
        StoryState.REJECTED.value,
    }
)

_SCHEDULED_STATES = frozenset({StoryState.UNSTARTED.value, StoryState.PLANNED.value})

# Accepted stories do not change the status of a partly accepted issue, and
# unscheduled ones only count when nothing else is scheduled.
_NEUTRAL_STATES = frozenset({StoryState.ACCEPTED.value, StoryState.UNSCHEDULED.value})


def type_label(stories: Iterable[Story]) -> str | None:
    """Pick the type label for a group of stories.

    Features win over bugs; chores and releases give no label.

    Args:
        stories: Stories linked to one issue.

    Returns:
        "enhancement", "bug" or None.
    """
    has_bugs = False
    for story in stories:
        if story.story_type == StoryType.FEATURE.value:
            return IssueLabel.ENHANCEMENT.value
        if story.story_type == StoryType.BUG.value:
            has_bugs = True
    return IssueLabel.BUG.value if has_bugs else None


def status_label(stories: Iterable[Story]) -> str | None:
    """Pick the status label for a group of stories.

    Args:
        stories: Stories linked to one issue.

    Returns:
        "in-flight", "scheduled" or "unscheduled", or None when every
        story has been accepted.

    Raises:
        UnknownStoryStateError: If a story has a state outside the known
            lifecycle. Scanning stops at the first one.
    """
    story_set = stories if isinstance(stories, StorySet) else StorySet(stories)
    if story_set.all_accepted():
        return None

    all_unscheduled = True
    for story in story_set:
        state = story.current_state
        if state in _NEUTRAL_STATES:
            continue
        if state in _IN_FLIGHT_STATES:
            return IssueLabel.IN_FLIGHT.value
        if state in _SCHEDULED_STATES:
            all_unscheduled = False
            continue
        raise UnknownStoryStateError(state, story_id=story.id)

    if all_unscheduled:
        return IssueLabel.UNSCHEDULED.value
    return IssueLabel.SCHEDULED.value


def derive_issue_labels(stories: Iterable[Story]) -> list[str]:
    """Derive the labels for an issue from its linked stories.

    The type label (if any) comes first, followed by the status label
    (if any). Fully accepted groups, including empty ones, get no status
    label. Stories are only read.

    Args:
        stories: Stories linked to one issue.

    Returns:
        Ordered label names.

    Raises:
        UnknownStoryStateError: If a story has an unrecognized state.
    """
    story_set = stories if isinstance(stories, StorySet) else StorySet(stories)

    labels: list[str] = []

    kind = type_label(story_set)
    if kind is not None:
        labels.append(kind)

    status = status_label(story_set)
    if status is not None:
        labels.append(status)

    return labels
