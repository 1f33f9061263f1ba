"""Batch orchestration of issue label derivation."""

from storysync.sync.metrics import SyncMetrics
from storysync.sync.runner import (
    IssueLabelSync,
    SyncResult,
    group_stories,
    unique_stories,
)


__all__ = [
    "IssueLabelSync",
    "SyncMetrics",
    "SyncResult",
    "group_stories",
    "unique_stories",
]
