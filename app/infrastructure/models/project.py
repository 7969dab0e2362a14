"""SQLAlchemy models for projects and project membership."""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class ProjectModel(Base):
    """Database representation of a project."""

    __tablename__ = "project"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    members = relationship(
        "ProjectMemberModel",
        back_populates="project",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )


class ProjectMemberModel(Base):
    """Membership of a user in a project."""

    __tablename__ = "project_member"
    __table_args__ = (
        UniqueConstraint("user_id", "project_id", name="uq_project_member_user_project"),
    )

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(
        Integer, ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    can_create_vibes = Column(Boolean, nullable=False, default=True)
    joined_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    project = relationship("ProjectModel", back_populates="members")
    user = relationship("UserModel", lazy="joined")


__all__ = ["ProjectMemberModel", "ProjectModel"]
