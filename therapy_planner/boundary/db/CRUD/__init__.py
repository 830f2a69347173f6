"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from therapy_planner.boundary.db.CRUD import folder_crud, session_crud

    folder = await folder_crud.get_by_id(db, folder_id)
"""

from therapy_planner.boundary.db.CRUD.base_crud import BaseCRUD
from therapy_planner.boundary.db.CRUD.folder_crud import FolderCRUD, folder_crud
from therapy_planner.boundary.db.CRUD.session_crud import TherapySessionCRUD, session_crud

__all__ = [
    "BaseCRUD",
    "FolderCRUD",
    "folder_crud",
    "TherapySessionCRUD",
    "session_crud",
]
