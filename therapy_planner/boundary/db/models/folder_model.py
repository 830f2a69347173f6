"""
Session folder ORM model.

A folder groups the recurring therapy sessions of one student. At most
one folder per student is flagged active.

Dependencies: sqlalchemy, therapy_planner.boundary.db.base
System role: Folder persistence for session grouping
"""

import enum
from datetime import date
from uuid import UUID

from sqlalchemy import Boolean, Date, Enum, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID as PG_UUID

from therapy_planner.boundary.db.base import Base, UUIDMixin, TimestampMixin


class FolderStatus(str, enum.Enum):
    """
    Folder lifecycle states.

    ACTIVE: Sessions are being worked through
    COMPLETED: Program finished
    PAUSED: Program on hold
    INCOMPLETE: Bulk creation failed part-way; repair pending
    """

    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"
    INCOMPLETE = "incomplete"


class SessionFolderModel(Base, UUIDMixin, TimestampMixin):
    """
    Session folder ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        student_id: Owning student
        name: Folder name, also embedded in each session_number
        description: Optional description
        is_active: Owner-scoped active flag
        status: FolderStatus
        total_sessions: Declared capacity (weeks * sessions per week)
        completed_sessions: Count of completed sessions
        start_date: Anchor date of the recurrence
        schedule_spec: Recurrence input, kept so incomplete folders can be repaired
        sessions: TherapySessionModel rows (cascade delete)
    """

    __tablename__ = "session_folders"

    student_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        nullable=False,
        index=True,
        doc="Owning student ID",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        doc="Folder name",
    )

    description: Mapped[str | None] = mapped_column(
        String(4096),
        nullable=True,
        default=None,
        doc="Folder description",
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
    )

    status: Mapped[FolderStatus] = mapped_column(
        Enum(FolderStatus, native_enum=False),
        nullable=False,
        default=FolderStatus.ACTIVE,
    )

    total_sessions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    completed_sessions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    start_date: Mapped[date] = mapped_column(Date, nullable=False)

    schedule_spec: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        doc="Weekly recurrence used to generate the sessions",
    )

    # Relationships
    sessions = relationship(
        "TherapySessionModel",
        back_populates="folder",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
