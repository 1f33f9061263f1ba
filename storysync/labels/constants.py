"""Issue label vocabulary."""

from enum import Enum


class IssueLabel(str, Enum):
    """Labels the sync manages on issues.

    - UNSCHEDULED: no linked story has been planned
    - SCHEDULED: at least one linked story is planned
    - IN_FLIGHT: a linked story is being worked, delivered or rejected
    - BUG / ENHANCEMENT: the kind of work the issue turned into
    """

    UNSCHEDULED = "unscheduled"
    SCHEDULED = "scheduled"
    IN_FLIGHT = "in-flight"
    BUG = "bug"
    ENHANCEMENT = "enhancement"


# Reserved for people triaging the issue; never derived from stories
DISCUSS_LABEL = "discuss"

STATUS_LABELS = frozenset(
    {
        IssueLabel.UNSCHEDULED.value,
        IssueLabel.SCHEDULED.value,
        IssueLabel.IN_FLIGHT.value,
    }
)

TYPE_LABELS = frozenset({IssueLabel.BUG.value, IssueLabel.ENHANCEMENT.value})

MANAGED_LABELS = STATUS_LABELS | TYPE_LABELS

# Colors used when creating managed labels. Empty means keep the
# tracker's own default color.
LABEL_COLORS: dict[str, str] = {
    IssueLabel.UNSCHEDULED.value: "e4eff7",
    IssueLabel.SCHEDULED.value: "f4f4f4",
    IssueLabel.IN_FLIGHT.value: "f3f3d1",
    IssueLabel.BUG.value: "",
    IssueLabel.ENHANCEMENT.value: "",
}

ISSUE_ONLY_LABELS: dict[str, str] = {
    DISCUSS_LABEL: "c2e0c6",
}
