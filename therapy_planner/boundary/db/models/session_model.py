"""
Therapy session ORM model.

One dated occurrence inside a session folder. The integer ordinal is the
authoritative position; session_number keeps the legacy
"<ordinal> - <folder name>" string for existing consumers.

Dependencies: sqlalchemy, therapy_planner.boundary.db.base
System role: Session persistence for scheduled therapy sessions
"""

import datetime
import enum
from uuid import UUID

from sqlalchemy import (
    Boolean,
    Date,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID as PG_UUID

from therapy_planner.boundary.db.base import Base, UUIDMixin, TimestampMixin


class SessionStatus(str, enum.Enum):
    """Session progress states; generated sessions start LOCKED."""

    LOCKED = "locked"
    UNLOCKED = "unlocked"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TherapySessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Therapy session ORM model.

    Constraints:
        (folder_id, ordinal): UNIQUE; ordinals are contiguous per folder
    """

    __tablename__ = "therapy_sessions"
    __table_args__ = (
        UniqueConstraint("folder_id", "ordinal", name="uq_therapy_sessions_folder_ordinal"),
    )

    folder_id: Mapped[UUID] = mapped_column(
        ForeignKey("session_folders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    student_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        nullable=False,
        index=True,
    )

    ordinal: Mapped[int] = mapped_column(Integer, nullable=False)

    session_number: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        doc="Legacy composite number: '<ordinal> - <folder name>'",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(4096), nullable=True)

    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    session_time: Mapped[str | None] = mapped_column(String(16), nullable=True)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)

    status: Mapped[SessionStatus] = mapped_column(
        Enum(SessionStatus, native_enum=False),
        nullable=False,
        default=SessionStatus.LOCKED,
    )

    is_paid: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    therapist_notes: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    # Relationships
    folder = relationship("SessionFolderModel", back_populates="sessions")
