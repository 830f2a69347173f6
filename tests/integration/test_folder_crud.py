"""
Test suite for FolderCRUD and TherapySessionCRUD against SQLite.

Tests owner-scoped queries, the exclusive activation statement and
folder-scoped session counts on a real (in-memory) database.

System role: Verification of folder persistence layer
"""

import uuid
from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from therapy_planner.boundary.db.CRUD.folder_crud import FolderCRUD, folder_crud
from therapy_planner.boundary.db.CRUD.session_crud import session_crud
from therapy_planner.boundary.db.models.folder_model import SessionFolderModel
from therapy_planner.boundary.db.models.session_model import SessionStatus


async def _folder(db: AsyncSession, student_id: uuid.UUID, name: str, **fields) -> SessionFolderModel:
    return await folder_crud.create(
        db,
        student_id=student_id,
        name=name,
        start_date=date(2024, 1, 1),
        **fields,
    )


async def _session(db: AsyncSession, folder: SessionFolderModel, ordinal: int, **fields):
    return await session_crud.create(
        db,
        folder_id=folder.id,
        student_id=folder.student_id,
        ordinal=ordinal,
        session_number=f"{ordinal} - {folder.name}",
        title=f"Session {ordinal}",
        date=date(2024, 1, ordinal),
        duration_minutes=45,
        **fields,
    )


class TestFolderCRUDInit:
    """Test suite for FolderCRUD initialization."""

    def test_init_should_set_model_to_folder_model(self) -> None:
        assert FolderCRUD().model == SessionFolderModel


class TestFolderCRUDQueries:
    """Test suite for owner-scoped folder queries."""

    @pytest.mark.asyncio
    async def test_get_by_student_should_filter_by_owner_and_flag(
        self, test_async_db: AsyncSession, student_id: uuid.UUID
    ) -> None:
        # Arrange
        active = await _folder(test_async_db, student_id, "A", is_active=True)
        inactive = await _folder(test_async_db, student_id, "B")
        await _folder(test_async_db, uuid.uuid4(), "C", is_active=True)

        # Act
        all_folders = await folder_crud.get_by_student(test_async_db, student_id)
        active_only = await folder_crud.get_by_student(test_async_db, student_id, is_active=True)
        excluded = await folder_crud.get_by_student(
            test_async_db, student_id, exclude_id=active.id
        )

        # Assert
        assert {f.id for f in all_folders} == {active.id, inactive.id}
        assert [f.id for f in active_only] == [active.id]
        assert [f.id for f in excluded] == [inactive.id]

    @pytest.mark.asyncio
    async def test_set_active_exclusive_should_leave_one_active_folder(
        self, test_async_db: AsyncSession, student_id: uuid.UUID
    ) -> None:
        """Test the single UPDATE activates the target and clears siblings."""
        # Arrange
        await _folder(test_async_db, student_id, "A", is_active=True)
        await _folder(test_async_db, student_id, "B", is_active=True)
        third = await _folder(test_async_db, student_id, "C")
        foreign = await _folder(test_async_db, uuid.uuid4(), "D", is_active=True)

        # Act
        touched = await folder_crud.set_active_exclusive(test_async_db, student_id, third.id)
        test_async_db.expire_all()

        # Assert
        assert touched == 3
        active = await folder_crud.get_by_student(test_async_db, student_id, is_active=True)
        assert [f.id for f in active] == [third.id]
        assert (await folder_crud.get_active_for_student(test_async_db, student_id)).id == third.id
        assert (await folder_crud.get_by_id(test_async_db, foreign.id)).is_active

    @pytest.mark.asyncio
    async def test_get_active_for_student_should_return_none_without_active(
        self, test_async_db: AsyncSession, student_id: uuid.UUID
    ) -> None:
        await _folder(test_async_db, student_id, "A")
        assert await folder_crud.get_active_for_student(test_async_db, student_id) is None

    @pytest.mark.asyncio
    async def test_update_stats_should_store_counts(
        self, test_async_db: AsyncSession, student_id: uuid.UUID
    ) -> None:
        folder = await _folder(test_async_db, student_id, "A")
        updated = await folder_crud.update_stats(
            test_async_db, folder.id, total_sessions=10, completed_sessions=4
        )
        assert updated.total_sessions == 10
        assert updated.completed_sessions == 4


class TestTherapySessionCRUD:
    """Test suite for folder-scoped session queries."""

    @pytest.mark.asyncio
    async def test_get_by_folder_should_order_by_ordinal(
        self, test_async_db: AsyncSession, student_id: uuid.UUID
    ) -> None:
        # Arrange
        folder = await _folder(test_async_db, student_id, "A")
        for ordinal in (3, 1, 2):
            await _session(test_async_db, folder, ordinal)

        # Act
        sessions = await session_crud.get_by_folder(test_async_db, folder.id)

        # Assert
        assert [s.ordinal for s in sessions] == [1, 2, 3]
        assert sessions[0].status == SessionStatus.LOCKED
        assert sessions[0].is_paid is False

    @pytest.mark.asyncio
    async def test_count_by_folder_should_filter_by_status(
        self, test_async_db: AsyncSession, student_id: uuid.UUID
    ) -> None:
        # Arrange
        folder = await _folder(test_async_db, student_id, "A")
        await _session(test_async_db, folder, 1, status=SessionStatus.COMPLETED)
        await _session(test_async_db, folder, 2)

        # Act / Assert
        assert await session_crud.count_by_folder(test_async_db, folder.id) == 2
        assert await session_crud.count_by_folder(
            test_async_db, folder.id, status=SessionStatus.COMPLETED
        ) == 1

    @pytest.mark.asyncio
    async def test_delete_many_should_remove_listed_sessions(
        self, test_async_db: AsyncSession, student_id: uuid.UUID
    ) -> None:
        # Arrange
        folder = await _folder(test_async_db, student_id, "A")
        first = await _session(test_async_db, folder, 1)
        await _session(test_async_db, folder, 2)

        # Act
        deleted = await session_crud.delete_many(test_async_db, [first.id])

        # Assert
        assert deleted == 1
        assert await session_crud.delete_many(test_async_db, []) == 0
        assert await session_crud.count_by_folder(test_async_db, folder.id) == 1

    @pytest.mark.asyncio
    async def test_delete_by_folder_should_remove_all_sessions(
        self, test_async_db: AsyncSession, student_id: uuid.UUID
    ) -> None:
        folder = await _folder(test_async_db, student_id, "A")
        await _session(test_async_db, folder, 1)
        await _session(test_async_db, folder, 2)

        assert await session_crud.delete_by_folder(test_async_db, folder.id) == 2
        assert await session_crud.count_by_folder(test_async_db, folder.id) == 0
