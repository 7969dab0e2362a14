"""SQLAlchemy models for activities and per-user read/dismiss marks."""

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    JSON,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.domain.entities import ActivityType
from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class ActivityModel(Base):
    """Immutable activity row owned by a project."""

    __tablename__ = "activity"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(
        Enum(
            ActivityType,
            name="activity_type",
            native_enum=False,
            length=32,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        index=True,
    )
    # Deleting the actor keeps the activity; only the attribution goes.
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    project_id = Column(
        Integer, ForeignKey("project.id", ondelete="CASCADE"), nullable=False, index=True
    )
    metadata_json = Column("metadata", JSON, nullable=False, default=dict)
    resource_link = Column(String(500), nullable=True)
    created_at = Column(
        DateTime, nullable=False, default=now_in_app_naive_datetime, index=True
    )

    user = relationship("UserModel", lazy="joined")
    project = relationship("ProjectModel", lazy="joined")


class ActivityReadModel(Base):
    """Marks that a user has consumed an activity."""

    __tablename__ = "activity_read"
    __table_args__ = (
        UniqueConstraint("activity_id", "user_id", name="uq_activity_read_activity_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    activity_id = Column(
        Integer, ForeignKey("activity.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    read_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


class ActivityDismissModel(Base):
    """Hides an activity from one user's feed without deleting it."""

    __tablename__ = "activity_dismiss"
    __table_args__ = (
        UniqueConstraint(
            "activity_id", "user_id", name="uq_activity_dismiss_activity_user"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    activity_id = Column(
        Integer, ForeignKey("activity.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    dismissed_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)


__all__ = ["ActivityDismissModel", "ActivityModel", "ActivityReadModel"]
