"""Unit tests for story set errors."""

from storysync.stories.errors import (
    SnapshotError,
    StorySetError,
    SyncAbortedError,
    UnknownStoryStateError,
)


class TestUnknownStoryStateError:
    """Tests for UnknownStoryStateError."""

    def test_message_names_state(self) -> None:
        """Test the message includes the offending state."""
        error = UnknownStoryStateError("archived", story_id=12)
        assert "archived" in str(error)
        assert "12" in str(error)
        assert error.state == "archived"
        assert error.story_id == 12

    def test_without_story_id(self) -> None:
        """Test the message without a story id."""
        error = UnknownStoryStateError("archived")
        assert str(error) == "unknown story state: 'archived'"

    def test_to_dict(self) -> None:
        """Test dictionary form for logging."""
        error = UnknownStoryStateError("archived", story_id=3)
        assert error.to_dict() == {
            "error_class": "UNKNOWN_STATE",
            "state": "archived",
            "story_id": 3,
        }

    def test_is_story_set_error(self) -> None:
        """Test the error belongs to the package hierarchy."""
        assert isinstance(UnknownStoryStateError("x"), StorySetError)


class TestSyncAbortedError:
    """Tests for SyncAbortedError."""

    def test_attributes(self) -> None:
        """Test issue key and reason are kept."""
        error = SyncAbortedError("org/repo#4", "unknown story state: 'x'")
        assert error.issue_key == "org/repo#4"
        assert "org/repo#4" in str(error)
        assert "unknown story state" in str(error)


class TestSnapshotError:
    """Tests for SnapshotError."""

    def test_message(self) -> None:
        """Test path and message are included."""
        error = SnapshotError("snap.json", "issues: bad")
        assert str(error) == "Invalid snapshot snap.json: issues: bad"
        assert isinstance(error, StorySetError)
