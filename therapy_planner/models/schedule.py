"""
Bulk schedule creation schemas.

Request/response contracts for creating a folder together with its
recurring sessions.

Dependencies: pydantic, therapy_planner.core.scheduling
System role: Schedule creation API contracts
"""

import uuid
from datetime import date

from pydantic import BaseModel, Field

from therapy_planner.core.scheduling.types import ScheduleSpec, SessionTemplate


class SessionTemplateRequest(BaseModel):
    """One weekly slot of the recurrence."""

    day_of_week: str = Field(..., description="Weekday name, sunday..saturday")
    time: str | None = Field(None, description="Start time, HH:MM")
    duration_minutes: int = Field(..., description="Session length in minutes")

    def to_template(self) -> SessionTemplate:
        return SessionTemplate(
            day_of_week=self.day_of_week,
            time=self.time,
            duration_minutes=self.duration_minutes,
        )


class ScheduleSetupRequest(BaseModel):
    """Weekly recurrence: weeks x sessions per week with slot templates."""

    total_weeks: int = Field(..., description="Number of weeks (1-52)")
    sessions_per_week: int = Field(..., description="Sessions per week (1-7)")
    session_templates: list[SessionTemplateRequest] = Field(
        default_factory=list,
        description="Slot templates; the first is reused when fewer than sessions_per_week",
    )

    def to_spec(self) -> ScheduleSpec:
        return ScheduleSpec(
            total_weeks=self.total_weeks,
            sessions_per_week=self.sessions_per_week,
            session_templates=[t.to_template() for t in self.session_templates],
        )


class BulkFolderCreationRequest(BaseModel):
    """Request schema for creating a folder with all of its sessions."""

    student_id: uuid.UUID
    folder_name: str = Field(..., max_length=255, description="Folder name")
    folder_description: str | None = Field(None, max_length=4096)
    session_setup: ScheduleSetupRequest
    set_active: bool = Field(False, description="Make this the student's active folder")
    start_date: date | None = Field(None, description="Anchor date (defaults to today)")


class FolderSummary(BaseModel):
    """Folder fields echoed after creation."""

    id: uuid.UUID
    student_id: uuid.UUID
    name: str
    description: str | None
    is_active: bool
    status: str
    total_sessions: int
    completed_sessions: int
    start_date: date


class CreatedSessionResponse(BaseModel):
    """Echo of one created session."""

    id: uuid.UUID
    ordinal: int
    session_number: str | None
    title: str | None
    date: date
    status: str | None


class CreationStatistics(BaseModel):
    """Timing and volume of a bulk creation."""

    sessions_created: int
    total_time_ms: int
    batches_used: int
    avg_time_per_session_ms: int


class BulkFolderCreationResponse(BaseModel):
    """Response schema for bulk folder creation and folder repair."""

    success: bool = True
    folder: FolderSummary
    sessions: list[CreatedSessionResponse]
    statistics: CreationStatistics
    warnings: list[str] = Field(default_factory=list)
