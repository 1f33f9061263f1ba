"""Tracker stories, deduplication and story set queries."""

from storysync.stories.constants import EPOCH_ZERO, HAS_PR_LABEL
from storysync.stories.equivalence import DupeEquivalence, equivalence_key
from storysync.stories.errors import (
    SnapshotError,
    StorySetError,
    SyncAbortedError,
    UnknownStoryStateError,
)
from storysync.stories.models import Story, StoryState, StoryType
from storysync.stories.story_set import DedupeResult, DuplicateGroup, StorySet


__all__ = [
    "EPOCH_ZERO",
    "HAS_PR_LABEL",
    "DedupeResult",
    "DupeEquivalence",
    "DuplicateGroup",
    "SnapshotError",
    "Story",
    "StorySet",
    "StorySetError",
    "StoryState",
    "StoryType",
    "SyncAbortedError",
    "UnknownStoryStateError",
    "equivalence_key",
]
