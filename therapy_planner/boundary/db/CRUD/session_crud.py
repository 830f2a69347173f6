"""
Therapy session CRUD operations.

Provides folder-scoped queries over TherapySessionModel.

Dependencies: sqlalchemy, therapy_planner.boundary.db.models
System role: Session persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from therapy_planner.boundary.db.models.session_model import (
    SessionStatus,
    TherapySessionModel,
)
from therapy_planner.boundary.db.CRUD.base_crud import BaseCRUD


class TherapySessionCRUD(BaseCRUD[TherapySessionModel]):
    """CRUD operations for TherapySessionModel."""

    def __init__(self) -> None:
        """Initialize TherapySessionCRUD with TherapySessionModel."""
        super().__init__(TherapySessionModel)

    async def get_by_folder(
        self,
        session: AsyncSession,
        folder_id: UUID,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[TherapySessionModel]:
        """
        Retrieve sessions of a folder ordered by ordinal.

        Args:
            session: Async database session
            folder_id: Parent folder UUID
            limit: Maximum number of sessions to return
            offset: Number of sessions to skip

        Returns:
            Sequence of TherapySessionModel
        """
        stmt = (
            select(TherapySessionModel)
            .where(TherapySessionModel.folder_id == folder_id)
            .order_by(TherapySessionModel.ordinal)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count_by_folder(
        self,
        session: AsyncSession,
        folder_id: UUID,
        status: SessionStatus | None = None,
    ) -> int:
        """Count sessions of a folder, optionally filtered by status."""
        stmt = (
            select(func.count())
            .select_from(TherapySessionModel)
            .where(TherapySessionModel.folder_id == folder_id)
        )
        if status is not None:
            stmt = stmt.where(TherapySessionModel.status == status)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def delete_by_folder(self, session: AsyncSession, folder_id: UUID) -> int:
        """Delete every session of a folder; returns rows deleted."""
        stmt = delete(TherapySessionModel).where(TherapySessionModel.folder_id == folder_id)
        result = await session.execute(stmt)
        return result.rowcount


session_crud = TherapySessionCRUD()
