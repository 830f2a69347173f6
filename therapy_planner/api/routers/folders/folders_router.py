"""
Session folder API endpoints.

Routes:
- POST /folders/bulk - Create folder with all of its recurring sessions
- GET /folders - List folders of a student
- GET /folders/active - Active folder of a student
- GET /folders/stats - Aggregate folder statistics of a student
- GET /folders/{id} - Get single folder
- POST /folders/{id}/set-active - Make folder the student's only active folder
- GET /folders/{id}/sessions - Sessions in numeric order
- GET /folders/{id}/milestones - Middle/final milestone status
- POST /folders/{id}/refresh-stats - Recount session statistics
- POST /folders/{id}/repair - Write missing sessions of an incomplete folder

Dependencies: therapy_planner.application.services, therapy_planner.models
System role: Session folder HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from therapy_planner.application.services import (
    ActivationService,
    FolderService,
    ScheduleService,
)
from therapy_planner.application.services.folder_service import folder_to_dict
from therapy_planner.api.deps.dependencies import (
    get_activation_service,
    get_folder_service,
    get_schedule_service,
)
from therapy_planner.models.folder import (
    FolderResponse,
    MilestoneStatusResponse,
    SessionDisplayResponse,
    SetActiveResponse,
    StudentFolderStatsResponse,
)
from therapy_planner.models.schedule import (
    BulkFolderCreationRequest,
    BulkFolderCreationResponse,
)

from .folder_error_handling import handle_folder_errors
from .folder_responses import (
    map_creation_to_response,
    map_folder_to_response,
    map_folders_to_response,
    map_milestones_to_response,
    map_sessions_to_response,
    map_student_stats_to_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/folders", tags=["folders"])


@router.post("/bulk", response_model=BulkFolderCreationResponse, status_code=201)
@handle_folder_errors
async def create_folder_with_sessions(
    request: BulkFolderCreationRequest,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> BulkFolderCreationResponse:
    """
    Create a folder and all of its recurring sessions.

    Args:
        request: BulkFolderCreationRequest with student, folder name and recurrence
        schedule_service: Injected ScheduleService

    Returns:
        BulkFolderCreationResponse: Folder, created sessions, statistics, warnings

    Raises:
        HTTPException(400): Invalid recurrence or missing parameters
        HTTPException(500): Persistence failed (body carries write counts)
    """
    logger.info(
        "Bulk folder creation requested",
        extra={
            "student_id": str(request.student_id),
            "folder_name": request.folder_name,
            "set_active": request.set_active,
        }
    )

    result = await schedule_service.create_schedule(
        student_id=request.student_id,
        folder_name=request.folder_name,
        spec=request.session_setup.to_spec(),
        folder_description=request.folder_description,
        set_active=request.set_active,
        start_date=request.start_date,
    )

    return map_creation_to_response(result)


@router.get("", response_model=list[FolderResponse])
@handle_folder_errors
async def list_folders(
    student_id: UUID,
    folder_service: FolderService = Depends(get_folder_service),
) -> list[FolderResponse]:
    """List folders of a student, newest first."""
    folders = await folder_service.list_student_folders(student_id)

    logger.info(
        "Folders retrieved successfully",
        extra={"student_id": str(student_id), "count": len(folders)}
    )

    return map_folders_to_response(folders)


@router.get("/active", response_model=FolderResponse)
@handle_folder_errors
async def get_active_folder(
    student_id: UUID,
    folder_service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    """
    Get the active folder of a student.

    Raises:
        HTTPException(404): Student has no active folder
    """
    folder = await folder_service.get_active_folder(student_id)
    if folder is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No active folder for student {student_id}"
        )
    return map_folder_to_response(folder)


@router.get("/stats", response_model=StudentFolderStatsResponse)
@handle_folder_errors
async def get_student_folder_stats(
    student_id: UUID,
    folder_service: FolderService = Depends(get_folder_service),
) -> StudentFolderStatsResponse:
    """Aggregate folder and session counts for a student."""
    stats = await folder_service.get_student_stats(student_id)
    return map_student_stats_to_response(stats)


@router.get("/{folder_id}", response_model=FolderResponse)
@handle_folder_errors
async def get_folder(
    folder_id: UUID,
    folder_service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    """
    Get single folder by ID.

    Raises:
        HTTPException(404): Folder not found
    """
    folder = await folder_service.get_folder(folder_id)
    return map_folder_to_response(folder)


@router.post("/{folder_id}/set-active", response_model=SetActiveResponse)
@handle_folder_errors
async def set_active_folder(
    folder_id: UUID,
    activation_service: ActivationService = Depends(get_activation_service),
) -> SetActiveResponse:
    """
    Make a folder its student's only active folder.

    Args:
        folder_id: Folder to activate
        activation_service: Injected ActivationService

    Returns:
        SetActiveResponse: Activated folder

    Raises:
        HTTPException(404): Folder not found
    """
    folder = await activation_service.set_active_folder(folder_id)

    return SetActiveResponse(
        success=True,
        folder=map_folder_to_response(folder_to_dict(folder)),
        message=f"Folder '{folder.name}' is now active",
    )


@router.get("/{folder_id}/sessions", response_model=list[SessionDisplayResponse])
@handle_folder_errors
async def list_folder_sessions(
    folder_id: UUID,
    folder_service: FolderService = Depends(get_folder_service),
) -> list[SessionDisplayResponse]:
    """
    List sessions of a folder in numeric session order.

    Raises:
        HTTPException(404): Folder not found
    """
    sessions = await folder_service.get_sessions_for_display(folder_id)

    logger.info(
        "Folder sessions retrieved successfully",
        extra={"folder_id": str(folder_id), "count": len(sessions)}
    )

    return map_sessions_to_response(sessions)


@router.get("/{folder_id}/milestones", response_model=MilestoneStatusResponse)
@handle_folder_errors
async def get_folder_milestones(
    folder_id: UUID,
    folder_service: FolderService = Depends(get_folder_service),
) -> MilestoneStatusResponse:
    """
    Middle and final milestone ordinals with their completion flags.

    Raises:
        HTTPException(404): Folder not found
    """
    milestones = await folder_service.get_milestone_status(folder_id)
    return map_milestones_to_response(milestones)


@router.post("/{folder_id}/refresh-stats", response_model=FolderResponse)
@handle_folder_errors
async def refresh_folder_stats(
    folder_id: UUID,
    folder_service: FolderService = Depends(get_folder_service),
) -> FolderResponse:
    """
    Recount total and completed sessions of a folder.

    Raises:
        HTTPException(404): Folder not found
    """
    folder = await folder_service.refresh_folder_stats(folder_id)
    return map_folder_to_response(folder)


@router.post("/{folder_id}/repair", response_model=BulkFolderCreationResponse)
@handle_folder_errors
async def repair_folder(
    folder_id: UUID,
    schedule_service: ScheduleService = Depends(get_schedule_service),
) -> BulkFolderCreationResponse:
    """
    Write the sessions missing from an incomplete folder.

    Raises:
        HTTPException(404): Folder not found
        HTTPException(409): Folder is not incomplete
        HTTPException(500): Some writes failed again
    """
    logger.info("Folder repair requested", extra={"folder_id": str(folder_id)})

    result = await schedule_service.repair_folder(folder_id)
    return map_creation_to_response(result)
