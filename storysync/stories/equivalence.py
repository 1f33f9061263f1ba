"""Content equivalence used to detect duplicate stories."""

from typing import NamedTuple

from storysync.stories.constants import LABEL_SIGNATURE_SEPARATOR
from storysync.stories.models import Story


class DupeEquivalence(NamedTuple):
    """Fingerprint shared by stories that duplicate each other.

    Attributes:
        name: Exact story name.
        description: Exact story description.
        labels: Sorted label names joined by a comma.
    """

    name: str
    description: str
    labels: str


def label_signature(story: Story) -> str:
    """Build the canonical label signature of a story.

    Names are sorted by code point (case-sensitive) so that label order in
    the tracker does not matter.

    Args:
        story: Story to sign.

    Returns:
        Comma-joined sorted label names.
    """
    return LABEL_SIGNATURE_SEPARATOR.join(sorted(story.labels))


def equivalence_key(story: Story) -> DupeEquivalence:
    """Compute the duplicate-detection key of a story.

    Identity, type and state do not take part: two stories with the same
    name, description and labels are duplicates whatever else differs.

    Args:
        story: Story to classify.

    Returns:
        The story's DupeEquivalence.
    """
    return DupeEquivalence(
        name=story.name,
        description=story.description,
        labels=label_signature(story),
    )
