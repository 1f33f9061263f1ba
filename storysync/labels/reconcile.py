"""Plan label changes for an issue."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from storysync.labels.constants import MANAGED_LABELS


@dataclass(frozen=True)
class LabelPlan:
    """Changes needed to bring an issue's labels to the derived set.

    Attributes:
        to_add: Derived labels the issue is missing, in derived order.
        to_remove: Managed labels on the issue that are no longer derived.
    """

    to_add: list[str] = field(default_factory=list)
    to_remove: list[str] = field(default_factory=list)

    @property
    def is_noop(self) -> bool:
        """Whether the issue is already up to date."""
        return not self.to_add and not self.to_remove

    def to_dict(self) -> dict[str, list[str]]:
        """Convert plan to dictionary.

        Returns:
            Dictionary with to_add and to_remove lists.
        """
        return {"to_add": list(self.to_add), "to_remove": list(self.to_remove)}


def plan_label_changes(
    current: Iterable[str],
    desired: Iterable[str],
    remove_stale: bool = True,
) -> LabelPlan:
    """Compare an issue's labels with the derived ones.

    Names are compared exactly. Only labels from the managed vocabulary are
    ever removed, so "discuss" and anything else people put on the issue
    stays.

    Args:
        current: Labels currently on the issue.
        desired: Labels derived from the issue's stories.
        remove_stale: Whether to remove managed labels no longer derived.

    Returns:
        LabelPlan with the additions and removals.
    """
    current_labels = list(current)
    desired_labels = list(dict.fromkeys(desired))

    present = set(current_labels)
    to_add = [label for label in desired_labels if label not in present]

    to_remove: list[str] = []
    if remove_stale:
        wanted = set(desired_labels)
        to_remove = [
            label
            for label in dict.fromkeys(current_labels)
            if label in MANAGED_LABELS and label not in wanted
        ]

    return LabelPlan(to_add=to_add, to_remove=to_remove)
