"""Domain entities exposed by the application."""

from .activity import (
    METADATA_BY_TYPE,
    Activity,
    ActivityActor,
    ActivityFeed,
    ActivityMetadata,
    ActivityType,
    CommentAddedMetadata,
    CutCreatedMetadata,
    CutMovedMetadata,
    FileSharedMetadata,
    FileUploadedMetadata,
    LyricsUpdatedMetadata,
    MemberAddedMetadata,
    ProjectCreatedMetadata,
    VibeCreatedMetadata,
)
from .cut import Comment, Cut
from .file import FileKind, ManagedFile, cut_storage_prefix
from .invitation import Invitation
from .notification import Notification, NotificationType
from .project import Project, ProjectMember
from .role import Role
from .user import User
from .vibe import Vibe

__all__ = [
    "Activity",
    "ActivityActor",
    "ActivityFeed",
    "ActivityMetadata",
    "ActivityType",
    "Comment",
    "CommentAddedMetadata",
    "Cut",
    "CutCreatedMetadata",
    "CutMovedMetadata",
    "FileKind",
    "FileSharedMetadata",
    "FileUploadedMetadata",
    "Invitation",
    "LyricsUpdatedMetadata",
    "METADATA_BY_TYPE",
    "ManagedFile",
    "MemberAddedMetadata",
    "Notification",
    "NotificationType",
    "Project",
    "ProjectCreatedMetadata",
    "ProjectMember",
    "Role",
    "User",
    "Vibe",
    "VibeCreatedMetadata",
    "cut_storage_prefix",
]
