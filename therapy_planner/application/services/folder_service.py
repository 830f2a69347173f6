"""
Folder service orchestrator.

Read paths and bookkeeping for session folders: listings, the active
folder, display ordering, milestone status and session statistics.

Dependencies: therapy_planner.boundary.db.CRUD, therapy_planner.core.scheduling
System role: Folder use case orchestration
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from therapy_planner.boundary.db.CRUD.folder_crud import folder_crud
from therapy_planner.boundary.db.CRUD.session_crud import session_crud
from therapy_planner.boundary.db.models.folder_model import FolderStatus, SessionFolderModel
from therapy_planner.boundary.db.models.session_model import SessionStatus
from therapy_planner.core.exceptions import FolderNotFoundError
from therapy_planner.core.scheduling.milestones import milestone_status, session_ordinal
from therapy_planner.core.scheduling.numbering import display_number

logger = logging.getLogger(__name__)


def folder_to_dict(folder: SessionFolderModel) -> dict:
    return {
        "id": folder.id,
        "student_id": folder.student_id,
        "name": folder.name,
        "description": folder.description,
        "is_active": folder.is_active,
        "status": folder.status.value,
        "total_sessions": folder.total_sessions,
        "completed_sessions": folder.completed_sessions,
        "start_date": folder.start_date,
        "created_at": folder.created_at,
        "updated_at": folder.updated_at,
    }


class FolderService:
    """Folder service orchestrator."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize folder service with async database session.

        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def _require_folder(self, folder_id: UUID) -> SessionFolderModel:
        folder = await folder_crud.get_by_id(self.db, folder_id)
        if not folder:
            raise FolderNotFoundError(folder_id)
        return folder

    async def get_folder(self, folder_id: UUID) -> dict:
        """
        Get folder by ID.

        Raises:
            FolderNotFoundError: If folder not found
        """
        folder = await self._require_folder(folder_id)
        return folder_to_dict(folder)

    async def list_student_folders(self, student_id: UUID) -> list[dict]:
        """
        Get all folders of a student, newest first.

        Args:
            student_id: Owning student

        Returns:
            list[dict]: Folder dicts
        """
        try:
            folders = await folder_crud.get_by_student(self.db, student_id)
            return [folder_to_dict(f) for f in folders]
        except Exception as e:
            logger.error(
                "Failed to list folders",
                extra={"error": str(e), "student_id": str(student_id)}
            )
            raise

    async def get_active_folder(self, student_id: UUID) -> dict | None:
        """Active folder of a student, or None."""
        folder = await folder_crud.get_active_for_student(self.db, student_id)
        return folder_to_dict(folder) if folder else None

    async def get_sessions_for_display(self, folder_id: UUID) -> list[dict]:
        """
        Get folder sessions in numeric session order.

        Rows are ordered by decoded ordinal, not by the stored
        session_number string, so "10 - X" sorts after "9 - X".

        Args:
            folder_id: Folder UUID

        Returns:
            list[dict]: Session dicts with display_session_number added

        Raises:
            FolderNotFoundError: If folder not found
        """
        await self._require_folder(folder_id)
        sessions = await session_crud.get_by_folder(self.db, folder_id)

        rows = [
            {
                "id": s.id,
                "ordinal": session_ordinal(s),
                "session_number": s.session_number,
                "display_session_number": display_number(s.session_number),
                "title": s.title,
                "description": s.description,
                "date": s.date,
                "session_time": s.session_time,
                "duration_minutes": s.duration_minutes,
                "status": s.status.value,
                "is_paid": s.is_paid,
                "therapist_notes": s.therapist_notes,
            }
            for s in sessions
        ]
        rows.sort(key=lambda row: row["ordinal"])
        return rows

    async def get_milestone_status(self, folder_id: UUID) -> dict:
        """
        Resolve middle/final milestone flags from the folder's current sessions.

        The milestone total is the number of sessions that exist, so a
        folder left incomplete resolves against what was actually written.

        Raises:
            FolderNotFoundError: If folder not found
        """
        await self._require_folder(folder_id)
        sessions = await session_crud.get_by_folder(self.db, folder_id)
        status = milestone_status(len(sessions), sessions)

        return {
            "folder_id": folder_id,
            "total_sessions": len(sessions),
            "middle_session_number": status.middle_ordinal,
            "final_session_number": status.final_ordinal,
            "middle_completed": status.middle_completed,
            "final_completed": status.final_completed,
        }

    async def refresh_folder_stats(self, folder_id: UUID) -> dict:
        """
        Recount total and completed sessions and store them on the folder.

        Raises:
            FolderNotFoundError: If folder not found
        """
        await self._require_folder(folder_id)
        try:
            total = await session_crud.count_by_folder(self.db, folder_id)
            completed = await session_crud.count_by_folder(
                self.db, folder_id, status=SessionStatus.COMPLETED
            )
            updated = await folder_crud.update_stats(
                self.db,
                folder_id,
                total_sessions=total,
                completed_sessions=completed,
            )
            await self.db.commit()

            logger.info(
                f"Updated stats for folder: {completed}/{total} sessions",
                extra={"folder_id": str(folder_id)}
            )
            return folder_to_dict(updated)
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to refresh folder stats",
                extra={"error": str(e), "folder_id": str(folder_id)}
            )
            raise

    async def get_student_stats(self, student_id: UUID) -> dict:
        """Aggregate folder and session counts for a student."""
        folders = await folder_crud.get_by_student(self.db, student_id)
        return {
            "total_folders": len(folders),
            "active_folders": sum(1 for f in folders if f.is_active),
            "completed_folders": sum(1 for f in folders if f.status == FolderStatus.COMPLETED),
            "total_sessions": sum(f.total_sessions for f in folders),
            "completed_sessions": sum(f.completed_sessions for f in folders),
        }
