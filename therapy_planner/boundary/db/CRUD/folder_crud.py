"""
Session folder CRUD operations.

Extends BaseCRUD with owner-scoped queries and the exclusive activation
statement.

Dependencies: sqlalchemy, therapy_planner.boundary.db.models
System role: Folder persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from therapy_planner.boundary.db.base import utc_now
from therapy_planner.boundary.db.models.folder_model import SessionFolderModel
from therapy_planner.boundary.db.CRUD.base_crud import BaseCRUD


class FolderCRUD(BaseCRUD[SessionFolderModel]):
    """CRUD operations for SessionFolderModel."""

    def __init__(self) -> None:
        """Initialize FolderCRUD with SessionFolderModel."""
        super().__init__(SessionFolderModel)

    async def get_by_student(
        self,
        session: AsyncSession,
        student_id: UUID,
        is_active: bool | None = None,
        exclude_id: UUID | None = None,
    ) -> Sequence[SessionFolderModel]:
        """
        Retrieve folders owned by a student, newest first.

        Args:
            session: Async database session
            student_id: Owning student
            is_active: Filter on the active flag (None for all)
            exclude_id: Folder to leave out of the result

        Returns:
            Sequence of SessionFolderModel
        """
        stmt = select(SessionFolderModel).where(SessionFolderModel.student_id == student_id)
        if is_active is not None:
            stmt = stmt.where(SessionFolderModel.is_active == is_active)
        if exclude_id is not None:
            stmt = stmt.where(SessionFolderModel.id != exclude_id)
        stmt = stmt.order_by(SessionFolderModel.created_at.desc())
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_active_for_student(
        self,
        session: AsyncSession,
        student_id: UUID,
    ) -> SessionFolderModel | None:
        """
        Retrieve the active folder of a student.

        Returns the most recently updated one if the exclusivity invariant
        has been broken.
        """
        stmt = (
            select(SessionFolderModel)
            .where(
                SessionFolderModel.student_id == student_id,
                SessionFolderModel.is_active.is_(True),
            )
            .order_by(SessionFolderModel.updated_at.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def set_active_exclusive(
        self,
        session: AsyncSession,
        student_id: UUID,
        folder_id: UUID,
    ) -> int:
        """
        Make folder_id the only active folder of a student in one statement.

        Args:
            session: Async database session
            student_id: Owning student
            folder_id: Folder to activate; must belong to student_id

        Returns:
            Number of folder rows touched (0 if the student has no folders)
        """
        stmt = (
            update(SessionFolderModel)
            .where(SessionFolderModel.student_id == student_id)
            .values(
                is_active=case(
                    (SessionFolderModel.id == folder_id, True),
                    else_=False,
                ),
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount

    async def update_stats(
        self,
        session: AsyncSession,
        folder_id: UUID,
        total_sessions: int,
        completed_sessions: int,
    ) -> SessionFolderModel | None:
        """Store recounted session totals on a folder."""
        return await self.update_by_id(
            session,
            folder_id,
            total_sessions=total_sessions,
            completed_sessions=completed_sessions,
            updated_at=utc_now(),
        )


folder_crud = FolderCRUD()
