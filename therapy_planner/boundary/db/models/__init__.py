"""
Database models package.

Exports:
  - SessionFolderModel, FolderStatus: Folder ORM model and status enum
  - TherapySessionModel, SessionStatus: Session ORM model and status enum

Dependencies: sqlalchemy, therapy_planner.boundary.db.base
System role: Database model definitions for domain entities
"""

from therapy_planner.boundary.db.models.folder_model import FolderStatus, SessionFolderModel
from therapy_planner.boundary.db.models.session_model import SessionStatus, TherapySessionModel

__all__ = [
    "SessionFolderModel",
    "FolderStatus",
    "TherapySessionModel",
    "SessionStatus",
]
