"""SQLAlchemy models for cuts and comments."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class CutModel(Base):
    """Database representation of a track version."""

    __tablename__ = "cut"

    id = Column(Integer, primary_key=True, index=True)
    vibe_id = Column(
        Integer, ForeignKey("vibe.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(200), nullable=False)
    order = Column(Integer, nullable=False, default=0)
    lyrics = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    vibe = relationship("VibeModel", lazy="joined")


class CommentModel(Base):
    """Database representation of feedback left on a cut."""

    __tablename__ = "comment"

    id = Column(Integer, primary_key=True, index=True)
    cut_id = Column(
        Integer, ForeignKey("cut.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    parent_id = Column(
        Integer, ForeignKey("comment.id", ondelete="CASCADE"), nullable=True, index=True
    )
    content = Column(Text, nullable=False)
    timestamp = Column(Float, nullable=True)
    audio_file_id = Column(String(100), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    user = relationship("UserModel", lazy="joined")


__all__ = ["CommentModel", "CutModel"]
