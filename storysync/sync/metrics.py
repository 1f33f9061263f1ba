"""Metrics for issue label sync runs."""

from dataclasses import dataclass, field


@dataclass
class SyncMetrics:
    """Metrics for sync operations.

    Tracks story counts, duplicates and labeled issues.
    """

    _instance: "SyncMetrics | None" = field(default=None, repr=False, init=False)

    stories_in: int = 0
    canonical_out: int = 0
    duplicates_discarded: int = 0
    issues_labeled: int = 0
    unknown_state_errors: int = 0

    @classmethod
    def get_instance(cls) -> "SyncMetrics":
        """Get or create the singleton instance.

        Returns:
            SyncMetrics instance.
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance for testing."""
        cls._instance = None

    def record_dedupe(self, stories_in: int, canonical: int, discarded: int) -> None:
        """Record the outcome of deduplication.

        Args:
            stories_in: Number of input stories.
            canonical: Number of canonical stories kept.
            discarded: Number of duplicates discarded.
        """
        self.stories_in += stories_in
        self.canonical_out += canonical
        self.duplicates_discarded += discarded

    def record_issue_labeled(self) -> None:
        """Record one issue whose labels were derived."""
        self.issues_labeled += 1

    def record_unknown_state(self) -> None:
        """Record a derivation stopped by an unknown story state."""
        self.unknown_state_errors += 1

    @property
    def duplicate_ratio(self) -> float:
        """Calculate the share of input stories that were duplicates.

        Returns:
            Duplicate ratio (0.0-1.0).
        """
        if self.stories_in == 0:
            return 0.0
        return self.duplicates_discarded / self.stories_in

    def to_dict(self) -> dict[str, object]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric values.
        """
        return {
            "stories_in": self.stories_in,
            "canonical_out": self.canonical_out,
            "duplicates_discarded": self.duplicates_discarded,
            "issues_labeled": self.issues_labeled,
            "unknown_state_errors": self.unknown_state_errors,
            "duplicate_ratio": round(self.duplicate_ratio, 4),
        }
