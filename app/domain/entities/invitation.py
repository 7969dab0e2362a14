"""Domain entity for pending account invitations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .role import Role


@dataclass
class Invitation:
    """An offer to join BandMate, redeemable once through its token."""

    id: int | None
    token: str
    email: str
    expires_at: datetime
    role: Role = Role.MEMBER
    name: str | None = None
    project_ids: list[int] = field(default_factory=list)
    invited_by_id: int | None = None
    invited_by_name: str | None = None
    accepted_at: datetime | None = None
    created_at: datetime | None = None

    def is_pending(self, now: datetime) -> bool:
        return self.accepted_at is None and self.expires_at > now


__all__ = ["Invitation"]
