"""
Session folder schemas.

Response contracts for folder read paths: listings, display ordering,
milestones and statistics.

Dependencies: pydantic
System role: Folder API contracts
"""

import uuid
from datetime import date, datetime

from pydantic import BaseModel


class FolderResponse(BaseModel):
    """Response schema for folder operations."""

    id: uuid.UUID
    student_id: uuid.UUID
    name: str
    description: str | None
    is_active: bool
    status: str
    total_sessions: int
    completed_sessions: int
    start_date: date
    created_at: datetime
    updated_at: datetime


class SetActiveResponse(BaseModel):
    """Response schema for activating a folder."""

    success: bool = True
    folder: FolderResponse
    message: str


class SessionDisplayResponse(BaseModel):
    """Session row with its display number."""

    id: uuid.UUID
    ordinal: int
    session_number: str
    display_session_number: int | str
    title: str
    description: str | None
    date: date
    session_time: str | None
    duration_minutes: int
    status: str
    is_paid: bool
    therapist_notes: str | None


class MilestoneStatusResponse(BaseModel):
    """Middle/final milestone ordinals and their completion flags."""

    folder_id: uuid.UUID
    total_sessions: int
    middle_session_number: int
    final_session_number: int
    middle_completed: bool
    final_completed: bool


class StudentFolderStatsResponse(BaseModel):
    """Aggregate folder statistics for one student."""

    total_folders: int
    active_folders: int
    completed_folders: int
    total_sessions: int
    completed_sessions: int
