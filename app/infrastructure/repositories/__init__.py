"""Repository implementations for infrastructure layer."""

from .activity_repository import ActivityRepository
from .cut_repository import CutRepository
from .file_repository import FileRepository
from .invitation_repository import InvitationRepository
from .notification_repository import NotificationRepository
from .project_repository import ProjectRepository
from .refresh_token_repository import RefreshTokenRepository
from .user_repository import UserRepository
from .vibe_repository import VibeRepository

__all__ = [
    "ActivityRepository",
    "CutRepository",
    "FileRepository",
    "InvitationRepository",
    "NotificationRepository",
    "ProjectRepository",
    "RefreshTokenRepository",
    "UserRepository",
    "VibeRepository",
]
