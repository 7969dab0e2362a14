"""Domain entities describing project activity and its typed metadata."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Any, ClassVar, Union


class ActivityType(str, Enum):
    """Tags of the significant actions recorded in a project feed."""

    PROJECT_CREATED = "project_created"
    MEMBER_ADDED = "member_added"
    VIBE_CREATED = "vibe_created"
    CUT_CREATED = "cut_created"
    CUT_MOVED = "cut_moved"
    FILE_UPLOADED = "file_uploaded"
    COMMENT_ADDED = "comment_added"
    LYRICS_UPDATED = "lyrics_updated"
    FILE_SHARED = "file_shared"


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


@dataclass(frozen=True)
class _ActivityMetadataBase:
    """Common serialization for the per-type metadata variants."""

    activity_type: ClassVar[ActivityType]

    def to_payload(self) -> dict[str, Any]:
        """Return the camelCase map stored with the activity."""

        return {_camel_case(item.name): getattr(self, item.name) for item in fields(self)}


@dataclass(frozen=True)
class ProjectCreatedMetadata(_ActivityMetadataBase):
    activity_type: ClassVar[ActivityType] = ActivityType.PROJECT_CREATED

    project_name: str


@dataclass(frozen=True)
class MemberAddedMetadata(_ActivityMetadataBase):
    activity_type: ClassVar[ActivityType] = ActivityType.MEMBER_ADDED

    member_name: str
    project_name: str


@dataclass(frozen=True)
class VibeCreatedMetadata(_ActivityMetadataBase):
    activity_type: ClassVar[ActivityType] = ActivityType.VIBE_CREATED

    vibe_name: str
    project_name: str


@dataclass(frozen=True)
class CutCreatedMetadata(_ActivityMetadataBase):
    activity_type: ClassVar[ActivityType] = ActivityType.CUT_CREATED

    cut_name: str
    vibe_name: str
    project_name: str


@dataclass(frozen=True)
class CutMovedMetadata(_ActivityMetadataBase):
    activity_type: ClassVar[ActivityType] = ActivityType.CUT_MOVED

    cut_name: str
    from_vibe_name: str
    to_vibe_name: str
    project_name: str


@dataclass(frozen=True)
class FileUploadedMetadata(_ActivityMetadataBase):
    activity_type: ClassVar[ActivityType] = ActivityType.FILE_UPLOADED

    file_name: str
    cut_name: str
    vibe_name: str
    project_name: str


@dataclass(frozen=True)
class CommentAddedMetadata(_ActivityMetadataBase):
    activity_type: ClassVar[ActivityType] = ActivityType.COMMENT_ADDED

    cut_name: str
    vibe_name: str
    project_name: str
    is_reply: bool
    comment_id: int


@dataclass(frozen=True)
class LyricsUpdatedMetadata(_ActivityMetadataBase):
    activity_type: ClassVar[ActivityType] = ActivityType.LYRICS_UPDATED

    cut_name: str
    vibe_name: str
    project_name: str


@dataclass(frozen=True)
class FileSharedMetadata(_ActivityMetadataBase):
    activity_type: ClassVar[ActivityType] = ActivityType.FILE_SHARED

    file_name: str
    cut_name: str
    project_name: str


ActivityMetadata = Union[
    ProjectCreatedMetadata,
    MemberAddedMetadata,
    VibeCreatedMetadata,
    CutCreatedMetadata,
    CutMovedMetadata,
    FileUploadedMetadata,
    CommentAddedMetadata,
    LyricsUpdatedMetadata,
    FileSharedMetadata,
]

METADATA_BY_TYPE: dict[ActivityType, type[_ActivityMetadataBase]] = {
    variant.activity_type: variant
    for variant in (
        ProjectCreatedMetadata,
        MemberAddedMetadata,
        VibeCreatedMetadata,
        CutCreatedMetadata,
        CutMovedMetadata,
        FileUploadedMetadata,
        CommentAddedMetadata,
        LyricsUpdatedMetadata,
        FileSharedMetadata,
    )
}


@dataclass
class ActivityActor:
    """Display fields of the user who performed an activity."""

    id: int
    name: str
    avatar_url: str | None = None


@dataclass
class Activity:
    """Immutable log entry of a significant action within a project."""

    id: int | None
    type: ActivityType
    actor_id: int | None
    project_id: int
    metadata: dict[str, Any] = field(default_factory=dict)
    resource_link: str | None = None
    created_at: datetime | None = None
    actor: ActivityActor | None = None
    project_name: str | None = None
    is_read: bool = False


@dataclass
class ActivityFeed:
    """A page of activities together with the user's counters."""

    activities: list[Activity]
    total: int
    unread_count: int

    @classmethod
    def empty(cls) -> "ActivityFeed":
        return cls(activities=[], total=0, unread_count=0)


__all__ = [
    "Activity",
    "ActivityActor",
    "ActivityFeed",
    "ActivityMetadata",
    "ActivityType",
    "CommentAddedMetadata",
    "CutCreatedMetadata",
    "CutMovedMetadata",
    "FileSharedMetadata",
    "FileUploadedMetadata",
    "LyricsUpdatedMetadata",
    "METADATA_BY_TYPE",
    "MemberAddedMetadata",
    "ProjectCreatedMetadata",
    "VibeCreatedMetadata",
]
