"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - SessionFolderModel, TherapySessionModel: Domain entities
  - FolderStatus, SessionStatus: Enum types for state tracking
  - folder_crud, session_crud: CRUD operation singletons
  - FolderRecordStore: Transaction-per-call collaborator for bulk writes

Dependencies: sqlalchemy, therapy_planner.configs
System role: Database adapter for session folders and therapy sessions
"""

from therapy_planner.boundary.db.base import Base, TimestampMixin, UUIDMixin
from therapy_planner.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from therapy_planner.boundary.db.models import (
    FolderStatus,
    SessionFolderModel,
    SessionStatus,
    TherapySessionModel,
)
from therapy_planner.boundary.db.CRUD import (
    BaseCRUD,
    FolderCRUD,
    TherapySessionCRUD,
    folder_crud,
    session_crud,
)
from therapy_planner.boundary.db.record_store import FolderRecordStore

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "SessionFolderModel",
    "FolderStatus",
    "TherapySessionModel",
    "SessionStatus",
    # CRUD
    "BaseCRUD",
    "FolderCRUD",
    "TherapySessionCRUD",
    "folder_crud",
    "session_crud",
    # Collaborator
    "FolderRecordStore",
]
