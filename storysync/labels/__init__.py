"""Issue label vocabulary, derivation and change planning."""

from storysync.labels.constants import (
    DISCUSS_LABEL,
    ISSUE_ONLY_LABELS,
    LABEL_COLORS,
    MANAGED_LABELS,
    STATUS_LABELS,
    TYPE_LABELS,
    IssueLabel,
)
from storysync.labels.derivation import derive_issue_labels, status_label, type_label
from storysync.labels.reconcile import LabelPlan, plan_label_changes


__all__ = [
    "DISCUSS_LABEL",
    "ISSUE_ONLY_LABELS",
    "LABEL_COLORS",
    "MANAGED_LABELS",
    "STATUS_LABELS",
    "TYPE_LABELS",
    "IssueLabel",
    "LabelPlan",
    "derive_issue_labels",
    "plan_label_changes",
    "status_label",
    "type_label",
]
