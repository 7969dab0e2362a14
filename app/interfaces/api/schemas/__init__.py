from .activity import (
    ActivityListResponse,
    ActivityProjectRead,
    ActivityRead,
    ActivityUserRead,
)
from .auth import LoginRequest, LoginResponse, RefreshRequest, RefreshResponse, SessionUser
from .base import CamelModel, CountResponse, MessageResponse
from .cut import (
    CommentCreate,
    CommentRead,
    CutCreate,
    CutDetailRead,
    CutMoveRequest,
    CutRead,
    LyricsEntry,
    LyricsLine,
    LyricsUpdate,
    VibeSummary,
)
from .file import FileRead, FileRegister, FileUpdate, PublicFileRead
from .invitation import (
    InvitationAccept,
    InvitationAccepted,
    InvitationCreate,
    InvitationCreated,
    InvitationList,
    InvitationPreviewRead,
    InvitationProjectRead,
    InvitationRead,
    InviterRead,
)
from .notification import NotificationListResponse, NotificationRead
from .project import (
    ProjectCreate,
    ProjectMemberAdd,
    ProjectMemberRead,
    ProjectRead,
    ProjectUpdate,
)
from .user import UserCreate, UserRead
from .vibe import VibeCreate, VibeDetailRead, VibeRead

__all__ = [
    "ActivityListResponse",
    "ActivityProjectRead",
    "ActivityRead",
    "ActivityUserRead",
    "CamelModel",
    "CommentCreate",
    "CommentRead",
    "CountResponse",
    "CutCreate",
    "CutDetailRead",
    "CutMoveRequest",
    "CutRead",
    "FileRead",
    "FileRegister",
    "FileUpdate",
    "InvitationAccept",
    "InvitationAccepted",
    "InvitationCreate",
    "InvitationCreated",
    "InvitationList",
    "InvitationPreviewRead",
    "InvitationProjectRead",
    "InvitationRead",
    "InviterRead",
    "LoginRequest",
    "LoginResponse",
    "LyricsEntry",
    "LyricsLine",
    "LyricsUpdate",
    "MessageResponse",
    "NotificationListResponse",
    "NotificationRead",
    "ProjectCreate",
    "ProjectMemberAdd",
    "ProjectMemberRead",
    "ProjectRead",
    "ProjectUpdate",
    "PublicFileRead",
    "RefreshRequest",
    "RefreshResponse",
    "SessionUser",
    "UserCreate",
    "UserRead",
    "VibeCreate",
    "VibeDetailRead",
    "VibeRead",
    "VibeSummary",
]
