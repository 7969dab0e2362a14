"""SQLAlchemy model for account invitations."""

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import relationship

from app.domain.entities import Role
from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class InvitationModel(Base):
    __tablename__ = "invitation"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(String(64), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, index=True)
    name = Column(String(100), nullable=True)
    role = Column(
        Enum(Role, name="invitation_role", native_enum=False, length=20),
        nullable=False,
        default=Role.MEMBER,
    )
    # Projects joined on acceptance; ids that vanish meanwhile are skipped.
    project_ids = Column(JSON, nullable=False, default=list)
    invited_by_id = Column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    expires_at = Column(DateTime, nullable=False)
    accepted_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    invited_by = relationship("UserModel", lazy="joined")


__all__ = ["InvitationModel"]
