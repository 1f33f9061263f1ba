"""Error types for story set processing."""


class StorySetError(Exception):
    """Base exception for story set processing."""


class UnknownStoryStateError(StorySetError):
    """Raised when a story carries a lifecycle state with no label mapping.

    Deriving a label for such a story would mean guessing, so derivation
    stops instead. This usually means the tracker's schema has changed.
    """

    def __init__(self, state: str, story_id: int | None = None) -> None:
        """Initialize the error.

        Args:
            state: The unrecognized state value.
            story_id: Identifier of the story carrying it.
        """
        self.state = state
        self.story_id = story_id
        message = f"unknown story state: {state!r}"
        if story_id is not None:
            message += f" (story {story_id})"
        super().__init__(message)

    def to_dict(self) -> dict[str, str | int | None]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": "UNKNOWN_STATE",
            "state": self.state,
            "story_id": self.story_id,
        }


class SyncAbortedError(StorySetError):
    """Raised when a sync batch stops because one issue could not be labeled."""

    def __init__(self, issue_key: str, reason: str) -> None:
        """Initialize the error.

        Args:
            issue_key: Issue whose stories caused the abort.
            reason: Human-readable reason.
        """
        self.issue_key = issue_key
        self.reason = reason
        super().__init__(f"Sync aborted at issue '{issue_key}': {reason}")


class SnapshotError(StorySetError):
    """Raised when a story snapshot cannot be loaded."""

    def __init__(self, path: str, message: str) -> None:
        """Initialize the error.

        Args:
            path: Path of the snapshot file.
            message: What was wrong with it.
        """
        self.path = path
        self.message = message
        super().__init__(f"Invalid snapshot {path}: {message}")
