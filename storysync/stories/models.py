"""Data models for tracker stories."""

from collections.abc import Iterable, Mapping
from datetime import datetime
from enum import Enum
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class StoryType(str, Enum):
    """Story types reported by the tracker.

    - UNSCHEDULED is the tracker's marker for stories nobody has planned yet
    - RELEASE is a milestone marker, not a unit of work
    """

    FEATURE = "feature"
    BUG = "bug"
    CHORE = "chore"
    UNSCHEDULED = "unscheduled"
    RELEASE = "release"


class StoryState(str, Enum):
    """Lifecycle states of a tracker story."""

    UNSCHEDULED = "unscheduled"
    UNSTARTED = "unstarted"
    PLANNED = "planned"
    STARTED = "started"
    FINISHED = "finished"
    DELIVERED = "delivered"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


class Story(BaseModel):
    """A story as returned by the tracker.

    Type and state are kept as plain strings so that values outside the
    known vocabulary survive loading and can be reported by label derivation.

    Attributes:
        id: Tracker identity; lower ids were created earlier.
        name: Story title.
        description: Story body.
        story_type: One of StoryType values.
        current_state: One of StoryState values.
        labels: Label names attached to the story.
        accepted_at: When the story was accepted, if it has been.
        url: Link to the story in the tracker.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: Annotated[int, Field(gt=0)]
    name: str
    description: str = ""
    story_type: Annotated[
        str, Field(validation_alias=AliasChoices("story_type", "type"))
    ]
    current_state: Annotated[
        str, Field(validation_alias=AliasChoices("current_state", "state"))
    ]
    labels: tuple[str, ...] = ()
    accepted_at: datetime | None = None
    url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("story_type", "current_state", mode="before")
    @classmethod
    def _enum_to_value(cls, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        # The tracker omits or nulls out empty descriptions
        return "" if value is None else value

    @field_validator("labels", mode="before")
    @classmethod
    def _flatten_labels(cls, value: Any) -> Any:
        """Accept tracker label objects as well as bare names.

        Label objects without a name carry nothing to match on and are
        dropped. A bare mapping is not a label list and is rejected.
        """
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        if isinstance(value, Mapping):
            msg = "labels must be a list of names or label objects"
            raise ValueError(msg)
        if not isinstance(value, Iterable):
            return value
        names: list[Any] = []
        for label in value:
            if isinstance(label, Mapping):
                if label.get("name") is not None:
                    names.append(label["name"])
            else:
                names.append(label)
        return tuple(names)

    def label_names(self) -> list[str]:
        """Return label names in their original order."""
        return list(self.labels)

    def has_label(self, label: str) -> bool:
        """Check for a label, ignoring case."""
        wanted = label.casefold()
        return any(name.casefold() == wanted for name in self.labels)
