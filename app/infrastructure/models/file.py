"""SQLAlchemy model for file metadata attached to cuts."""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from app.domain.entities import FileKind
from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


class ManagedFileModel(Base):
    """Metadata row for an audio take or stem archive."""

    __tablename__ = "managed_file"

    id = Column(Integer, primary_key=True, index=True)
    cut_id = Column(
        Integer, ForeignKey("cut.id", ondelete="CASCADE"), nullable=False, index=True
    )
    uploaded_by_id = Column(
        Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True, index=True
    )
    kind = Column(
        Enum(
            FileKind,
            name="file_kind",
            native_enum=False,
            length=16,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
    )
    name = Column(String(200), nullable=True)
    filename = Column(String(255), nullable=False)
    original_name = Column(String(255), nullable=False)
    path = Column(String(1000), nullable=False)
    file_size = Column(BigInteger, nullable=False, default=0)
    mime_type = Column(String(100), nullable=False)
    is_public = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    share_token = Column(String(64), nullable=True, unique=True, index=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(
        DateTime,
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )

    uploaded_by = relationship("UserModel", lazy="joined")


__all__ = ["ManagedFileModel"]
