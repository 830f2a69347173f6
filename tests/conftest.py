"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory record store, SQLite async databases, scheduling settings
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import asyncio
import uuid
from datetime import date
from types import SimpleNamespace
from typing import Any

import pytest

from therapy_planner.boundary.db.base import utc_now
from therapy_planner.configs.scheduling import FailurePolicy, SchedulingSettings
from therapy_planner.core.scheduling.types import ScheduleSpec, SessionTemplate


class InMemoryRecordStore:
    """
    Dict-backed stand-in for FolderRecordStore.

    Every session write yields to the event loop, so concurrent writes
    interleave the way they do against a real database. Failures are
    injected per ordinal, per folder update, or for the listing call.
    """

    def __init__(self) -> None:
        self.folders: dict[Any, SimpleNamespace] = {}
        self.sessions: dict[Any, SimpleNamespace] = {}
        self.fail_ordinals: set[int] = set()
        self.fail_once_ordinals: set[int] = set()
        self.fail_update_ids: set[Any] = set()
        self.fail_list_folders = False
        self.fail_session_deletes = False
        self.fail_create_folder = False
        self.write_calls = 0
        self.in_flight = 0
        self.max_in_flight = 0

    async def create_folder(self, **fields: Any) -> SimpleNamespace:
        if self.fail_create_folder:
            raise ConnectionError("folder insert failed")
        now = utc_now()
        folder = SimpleNamespace(
            id=fields.pop("id", None) or uuid.uuid4(),
            created_at=now,
            updated_at=now,
            **fields,
        )
        self.folders[folder.id] = folder
        return folder

    async def get_folder(self, folder_id: Any) -> SimpleNamespace | None:
        return self.folders.get(folder_id)

    async def update_folder(self, folder_id: Any, **fields: Any) -> SimpleNamespace | None:
        if folder_id in self.fail_update_ids:
            raise RuntimeError(f"update failed for folder {folder_id}")
        folder = self.folders.get(folder_id)
        if folder is None:
            return None
        for key, value in fields.items():
            setattr(folder, key, value)
        folder.updated_at = utc_now()
        return folder

    async def list_folders(
        self,
        student_id: Any,
        is_active: bool | None = None,
        exclude_id: Any = None,
    ) -> list[SimpleNamespace]:
        if self.fail_list_folders:
            raise RuntimeError("folder listing unavailable")
        return [
            f for f in self.folders.values()
            if f.student_id == student_id
            and (is_active is None or f.is_active == is_active)
            and f.id != exclude_id
        ]

    async def set_active_folder(
        self,
        folder_id: Any,
        student_id: Any = None,
    ) -> SimpleNamespace | None:
        folder = self.folders.get(folder_id)
        if folder is None or (student_id is not None and folder.student_id != student_id):
            return None
        for other in self.folders.values():
            if other.student_id == folder.student_id:
                other.is_active = other.id == folder_id
        return folder

    async def delete_folder(self, folder_id: Any) -> bool:
        self.sessions = {
            k: s for k, s in self.sessions.items() if s.folder_id != folder_id
        }
        return self.folders.pop(folder_id, None) is not None

    async def create_session_record(self, fields: dict[str, Any]) -> SimpleNamespace:
        self.write_calls += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            ordinal = fields["ordinal"]
            if ordinal in self.fail_ordinals:
                raise RuntimeError(f"insert failed for session {ordinal}")
            if ordinal in self.fail_once_ordinals:
                self.fail_once_ordinals.discard(ordinal)
                raise ConnectionError(f"transient failure for session {ordinal}")
            record = SimpleNamespace(id=uuid.uuid4(), **fields)
            self.sessions[record.id] = record
            return record
        finally:
            self.in_flight -= 1

    async def delete_session_records(self, session_ids: list[Any]) -> int:
        if self.fail_session_deletes:
            raise RuntimeError("delete failed")
        deleted = 0
        for session_id in session_ids:
            if self.sessions.pop(session_id, None) is not None:
                deleted += 1
        return deleted

    async def list_session_records(self, folder_id: Any) -> list[SimpleNamespace]:
        return sorted(
            (s for s in self.sessions.values() if s.folder_id == folder_id),
            key=lambda s: s.ordinal,
        )

    def sessions_in(self, folder_id: Any) -> list[SimpleNamespace]:
        return [s for s in self.sessions.values() if s.folder_id == folder_id]


@pytest.fixture
def record_store() -> InMemoryRecordStore:
    """Provide an empty in-memory record store."""
    return InMemoryRecordStore()


@pytest.fixture
def scheduling_settings() -> SchedulingSettings:
    """Provide scheduling settings with the legacy unbounded fan-out."""
    return SchedulingSettings(
        batch_size=10,
        max_concurrency=0,
        write_retry_attempts=1,
        failure_policy=FailurePolicy.ROLLBACK,
    )


@pytest.fixture
def student_id() -> uuid.UUID:
    """Generate a test student ID."""
    return uuid.uuid4()


@pytest.fixture
def anchor_date() -> date:
    """A Wednesday."""
    return date(2024, 1, 3)


@pytest.fixture
def weekly_spec() -> ScheduleSpec:
    """23 weeks, one Monday session per week."""
    return ScheduleSpec(
        total_weeks=23,
        sessions_per_week=1,
        session_templates=[SessionTemplate(day_of_week="monday", duration_minutes=45)],
    )


@pytest.fixture
def twice_weekly_spec() -> ScheduleSpec:
    """4 weeks, Monday 10:00 and Thursday 16:30."""
    return ScheduleSpec(
        total_weeks=4,
        sessions_per_week=2,
        session_templates=[
            SessionTemplate(day_of_week="monday", duration_minutes=45, time="10:00"),
            SessionTemplate(day_of_week="thursday", duration_minutes=60, time="16:30"),
        ],
    )


async def _create_engine(url: str, **kwargs: Any):
    from sqlalchemy.ext.asyncio import create_async_engine
    from therapy_planner.boundary.db.base import Base

    engine = create_async_engine(url, **kwargs)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
    from sqlalchemy.pool import StaticPool

    engine = await _create_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
async def session_factory(tmp_path):
    """
    Session factory over a file-backed SQLite database.

    FolderRecordStore opens one session per call, so tests that use it need
    independent connections rather than a single shared in-memory one.

    Yields:
        async_sessionmaker: Factory with expire_on_commit=False
    """
    from therapy_planner.boundary.db.connection import get_async_session_factory

    engine = await _create_engine(f"sqlite+aiosqlite:///{tmp_path / 'therapy.db'}")
    yield get_async_session_factory(engine)
    await engine.dispose()
