"""
Folder response mapping utilities.

Transforms service results, ORM models and dictionaries into Pydantic
response models. Centralizes response construction logic.

Dependencies: therapy_planner.models
System role: Folder response transformation
"""

from typing import Any

from therapy_planner.application.services.schedule_service import ScheduleCreationResult
from therapy_planner.boundary.db.models.folder_model import SessionFolderModel
from therapy_planner.models.folder import (
    FolderResponse,
    MilestoneStatusResponse,
    SessionDisplayResponse,
    StudentFolderStatsResponse,
)
from therapy_planner.models.schedule import (
    BulkFolderCreationResponse,
    CreatedSessionResponse,
    CreationStatistics,
    FolderSummary,
)


def map_folder_summary(folder: SessionFolderModel) -> FolderSummary:
    """
    Transform a folder ORM model into FolderSummary.

    Args:
        folder: Created or repaired folder

    Returns:
        FolderSummary: Pydantic model for API response
    """
    return FolderSummary(
        id=folder.id,
        student_id=folder.student_id,
        name=folder.name,
        description=folder.description,
        is_active=folder.is_active,
        status=folder.status.value,
        total_sessions=folder.total_sessions,
        completed_sessions=folder.completed_sessions,
        start_date=folder.start_date,
    )


def map_creation_to_response(result: ScheduleCreationResult) -> BulkFolderCreationResponse:
    """
    Transform a ScheduleCreationResult into BulkFolderCreationResponse.

    Args:
        result: Folder, created sessions, statistics and warnings

    Returns:
        BulkFolderCreationResponse: Pydantic model for API response
    """
    return BulkFolderCreationResponse(
        success=True,
        folder=map_folder_summary(result.folder),
        sessions=[
            CreatedSessionResponse(
                id=s.id,
                ordinal=s.ordinal,
                session_number=s.session_number,
                title=s.title,
                date=s.date,
                status=s.status,
            )
            for s in result.sessions
        ],
        statistics=CreationStatistics(
            sessions_created=result.statistics.sessions_created,
            total_time_ms=result.statistics.total_time_ms,
            batches_used=result.statistics.batches_used,
            avg_time_per_session_ms=result.statistics.avg_time_per_session_ms,
        ),
        warnings=result.warnings,
    )


def map_folder_to_response(folder_data: dict[str, Any]) -> FolderResponse:
    """Transform folder data dictionary into FolderResponse."""
    return FolderResponse(**folder_data)


def map_folders_to_response(folders_data: list[dict[str, Any]]) -> list[FolderResponse]:
    """Transform list of folder dictionaries into list of FolderResponse."""
    return [map_folder_to_response(folder) for folder in folders_data]


def map_sessions_to_response(sessions_data: list[dict[str, Any]]) -> list[SessionDisplayResponse]:
    """
    Transform list of display session dictionaries into SessionDisplayResponse.

    Args:
        sessions_data: Session dicts with display_session_number

    Returns:
        list[SessionDisplayResponse]: List of Pydantic models for API response
    """
    return [SessionDisplayResponse(**session) for session in sessions_data]


def map_milestones_to_response(milestone_data: dict[str, Any]) -> MilestoneStatusResponse:
    return MilestoneStatusResponse(**milestone_data)


def map_student_stats_to_response(stats_data: dict[str, Any]) -> StudentFolderStatsResponse:
    return StudentFolderStatsResponse(**stats_data)
