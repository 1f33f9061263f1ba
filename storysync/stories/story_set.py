"""Story collections: deduplication and aggregate queries."""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import overload

from storysync.stories.constants import EPOCH_ZERO, HAS_PR_LABEL
from storysync.stories.equivalence import DupeEquivalence, equivalence_key
from storysync.stories.models import Story, StoryState, StoryType


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class StorySet(Sequence[Story]):
    """An immutable, ordered collection of stories.

    Order is preserved by every query that returns a subsequence, but no
    aggregate predicate depends on it.
    """

    __slots__ = ("_stories",)

    def __init__(self, stories: Iterable[Story] = ()) -> None:
        """Initialize the collection.

        Args:
            stories: Stories in source order.
        """
        self._stories: tuple[Story, ...] = tuple(stories)

    @overload
    def __getitem__(self, index: int) -> Story: ...

    @overload
    def __getitem__(self, index: slice) -> "StorySet": ...

    def __getitem__(self, index: int | slice) -> "Story | StorySet":
        if isinstance(index, slice):
            return StorySet(self._stories[index])
        return self._stories[index]

    def __len__(self) -> int:
        return len(self._stories)

    def __iter__(self) -> Iterator[Story]:
        return iter(self._stories)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StorySet):
            return NotImplemented
        return self._stories == other._stories

    def __hash__(self) -> int:
        return hash(self._stories)

    def __repr__(self) -> str:
        return f"StorySet(ids={self.ids()!r})"

    def ids(self) -> list[int]:
        """Return story ids in collection order."""
        return [story.id for story in self._stories]

    def with_label(self, label: str) -> "StorySet":
        """Select stories carrying a label, ignoring case.

        Args:
            label: Label name to look for.

        Returns:
            Matching stories in their original order.
        """
        return StorySet(story for story in self._stories if story.has_label(label))

    def all_accepted(self) -> bool:
        """Check whether every story has been accepted (true when empty)."""
        return all(
            story.current_state == StoryState.ACCEPTED.value for story in self._stories
        )

    def unscheduled(self) -> bool:
        """Check whether every story carries the unscheduled type marker."""
        return all(
            story.story_type == StoryType.UNSCHEDULED.value for story in self._stories
        )

    def untriaged(self) -> bool:
        """Check whether every story is a chore.

        Chores are what the tracker files when nobody has triaged an
        incoming issue into a feature or a bug yet.
        """
        return all(
            story.story_type == StoryType.CHORE.value for story in self._stories
        )

    def has_pr(self) -> bool:
        """Check whether any story is linked to a pull request.

        Unlike with_label(), the label name must match exactly.
        """
        return any(HAS_PR_LABEL in story.labels for story in self._stories)

    def last_accepted(self) -> datetime:
        """Get the most recent acceptance time.

        Returns:
            Latest accepted_at among the stories, or EPOCH_ZERO when no
            story has been accepted.
        """
        accepted = [
            _as_utc(story.accepted_at)
            for story in self._stories
            if story.accepted_at is not None
        ]
        latest = max(accepted, default=EPOCH_ZERO)
        return max(latest, EPOCH_ZERO)

    def dedupe(self) -> "DedupeResult":
        """Split the collection into canonical stories and duplicates.

        Stories are bucketed by their equivalence key. Within each bucket
        the story with the lowest id (the oldest) is canonical and every
        other story is discarded. Both outputs are sorted by id.

        Returns:
            DedupeResult holding both partitions.
        """
        buckets: dict[DupeEquivalence, list[Story]] = {}
        for story in self._stories:
            buckets.setdefault(equivalence_key(story), []).append(story)

        canonical: list[Story] = []
        discarded: list[Story] = []
        groups: list[DuplicateGroup] = []

        for key, stories in buckets.items():
            if len(stories) == 1:
                canonical.append(stories[0])
                continue

            oldest_index = min(range(len(stories)), key=lambda i: stories[i].id)
            oldest = stories[oldest_index]
            duplicates = stories[:oldest_index] + stories[oldest_index + 1 :]
            canonical.append(oldest)
            discarded.extend(duplicates)
            groups.append(
                DuplicateGroup(
                    key=key,
                    survivor=oldest,
                    duplicates=StorySet(sorted(duplicates, key=_story_id)),
                )
            )

        groups.sort(key=lambda group: group.survivor.id)

        return DedupeResult(
            canonical=StorySet(sorted(canonical, key=_story_id)),
            discarded=StorySet(sorted(discarded, key=_story_id)),
            stories_in=len(self._stories),
            groups=groups,
        )

    def issue_labels(self) -> list[str]:
        """Derive the labels describing this collection on its issue.

        Raises:
            UnknownStoryStateError: If a story has an unrecognized state.
        """
        from storysync.labels.derivation import derive_issue_labels

        return derive_issue_labels(self)


def _story_id(story: Story) -> int:
    return story.id


@dataclass(frozen=True)
class DuplicateGroup:
    """A bucket of equivalent stories.

    Attributes:
        key: Equivalence key shared by the bucket.
        survivor: Oldest story, kept as canonical.
        duplicates: The rest of the bucket.
    """

    key: DupeEquivalence
    survivor: Story
    duplicates: StorySet


@dataclass(frozen=True)
class DedupeResult:
    """Result of deduplicating a story collection.

    Attributes:
        canonical: One story per equivalence bucket.
        discarded: Every story that lost to an older duplicate.
        stories_in: Number of input stories.
        groups: Buckets that contained duplicates.
    """

    canonical: StorySet
    discarded: StorySet
    stories_in: int = 0
    groups: list[DuplicateGroup] = field(default_factory=list)

    def __iter__(self) -> Iterator[StorySet]:
        """Allow ``canonical, discarded = story_set.dedupe()``."""
        return iter((self.canonical, self.discarded))

    @property
    def duplicates_total(self) -> int:
        """Number of discarded stories."""
        return len(self.discarded)
