"""ORM models used by the application infrastructure."""

from .activity import ActivityDismissModel, ActivityModel, ActivityReadModel
from .cut import CommentModel, CutModel
from .file import ManagedFileModel
from .invitation import InvitationModel
from .notification import NotificationModel
from .project import ProjectMemberModel, ProjectModel
from .refresh_token import RefreshTokenModel
from .user import UserModel
from .vibe import VibeModel

__all__ = [
    "ActivityDismissModel",
    "ActivityModel",
    "ActivityReadModel",
    "CommentModel",
    "CutModel",
    "InvitationModel",
    "ManagedFileModel",
    "NotificationModel",
    "ProjectMemberModel",
    "ProjectModel",
    "RefreshTokenModel",
    "UserModel",
    "VibeModel",
]
