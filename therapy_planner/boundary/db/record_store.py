"""
Folder record store.

Persistence collaborator for bulk schedule creation. Every call runs in
its own short transaction on a fresh AsyncSession, which is what lets the
batch persister issue session writes concurrently (a single AsyncSession
must not be shared between concurrent tasks).

Dependencies: sqlalchemy, therapy_planner.boundary.db.CRUD
System role: Transaction-per-call adapter over the CRUD layer
"""

import logging
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import async_sessionmaker

from therapy_planner.boundary.db.base import utc_now
from therapy_planner.boundary.db.CRUD.folder_crud import folder_crud
from therapy_planner.boundary.db.CRUD.session_crud import session_crud
from therapy_planner.boundary.db.models.folder_model import SessionFolderModel
from therapy_planner.boundary.db.models.session_model import (
    SessionStatus,
    TherapySessionModel,
)

logger = logging.getLogger(__name__)


class FolderRecordStore:
    """Transaction-per-call access to folders and their sessions."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """
        Initialize record store.

        Args:
            session_factory: Async session factory (expire_on_commit=False)
        """
        self._session_factory = session_factory

    async def create_folder(self, **fields: Any) -> SessionFolderModel:
        """Insert a folder and return it with generated id and timestamps."""
        async with self._session_factory() as db:
            async with db.begin():
                return await folder_crud.create(db, **fields)

    async def get_folder(self, folder_id: UUID) -> SessionFolderModel | None:
        async with self._session_factory() as db:
            return await folder_crud.get_by_id(db, folder_id)

    async def update_folder(self, folder_id: UUID, **fields: Any) -> SessionFolderModel | None:
        """Field-level folder update; updated_at is always refreshed."""
        fields.setdefault("updated_at", utc_now())
        async with self._session_factory() as db:
            async with db.begin():
                return await folder_crud.update_by_id(db, folder_id, **fields)

    async def list_folders(
        self,
        student_id: UUID,
        is_active: bool | None = None,
        exclude_id: UUID | None = None,
    ) -> Sequence[SessionFolderModel]:
        async with self._session_factory() as db:
            return await folder_crud.get_by_student(
                db,
                student_id,
                is_active=is_active,
                exclude_id=exclude_id,
            )

    async def set_active_folder(
        self,
        folder_id: UUID,
        student_id: UUID | None = None,
    ) -> SessionFolderModel | None:
        """
        Activate one folder and deactivate its siblings atomically.

        Args:
            folder_id: Folder to activate
            student_id: Expected owner (None to use the folder's owner)

        Returns:
            The activated folder, or None if missing or owned by someone else
        """
        async with self._session_factory() as db:
            async with db.begin():
                folder = await folder_crud.get_by_id(db, folder_id)
                if folder is None:
                    return None
                if student_id is not None and folder.student_id != student_id:
                    return None
                await folder_crud.set_active_exclusive(db, folder.student_id, folder_id)
            await db.refresh(folder)
            return folder

    async def delete_folder(self, folder_id: UUID) -> bool:
        async with self._session_factory() as db:
            async with db.begin():
                return await folder_crud.delete_by_id(db, folder_id)

    async def create_session_record(self, fields: dict[str, Any]) -> TherapySessionModel:
        """Insert one session record from a flat field map."""
        if "status" in fields:
            fields = {**fields, "status": SessionStatus(fields["status"])}
        async with self._session_factory() as db:
            async with db.begin():
                return await session_crud.create(db, **fields)

    async def delete_session_records(self, session_ids: Sequence[UUID]) -> int:
        """Delete session records by id; returns rows deleted."""
        async with self._session_factory() as db:
            async with db.begin():
                deleted = await session_crud.delete_many(db, session_ids)
        logger.info("Deleted session records", extra={"deleted": deleted})
        return deleted

    async def list_session_records(self, folder_id: UUID) -> Sequence[TherapySessionModel]:
        async with self._session_factory() as db:
            return await session_crud.get_by_folder(db, folder_id)
