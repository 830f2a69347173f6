"""
Folder activation service.

Keeps at most one active folder per student.

activate() is the tolerant path used during bulk creation: siblings are
deactivated one by one and a failed update is recorded, never raised, so
the new folder is still created. The invariant is then unverified and
the result says so. Two concurrent calls for the same student can both
see no active sibling; nothing here prevents that.

set_active_folder() is the explicit "set active" action and uses a single
conditional UPDATE, so it cannot leave two folders active.

Dependencies: therapy_planner.boundary.db.record_store
System role: Single-active-folder enforcement
"""

import logging
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from therapy_planner.boundary.db.models.folder_model import SessionFolderModel
from therapy_planner.boundary.db.record_store import FolderRecordStore
from therapy_planner.core.exceptions import FolderNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeactivationFailure:
    """A sibling folder that could not be deactivated."""

    folder_id: Any
    message: str


@dataclass
class ActivationResult:
    """Outcome of deactivating a student's other active folders."""

    student_id: Any
    target_folder_id: Any
    deactivated_ids: list[Any] = field(default_factory=list)
    failures: list[DeactivationFailure] = field(default_factory=list)

    @property
    def invariant_verified(self) -> bool:
        return not self.failures

    @property
    def warnings(self) -> list[str]:
        return [
            f"Could not deactivate folder {f.folder_id}: {f.message}"
            if f.folder_id is not None
            else f"Could not deactivate existing folders: {f.message}"
            for f in self.failures
        ]


class ActivationService:
    """Folder activation orchestrator."""

    def __init__(self, store: FolderRecordStore) -> None:
        """
        Initialize activation service.

        Args:
            store: Folder record store
        """
        self.store = store

    async def activate(self, student_id: UUID, target_folder_id: UUID) -> ActivationResult:
        """
        Deactivate every other active folder of a student.

        Args:
            student_id: Owning student
            target_folder_id: Folder that is becoming active (left untouched)

        Returns:
            ActivationResult: Deactivated ids and per-folder failures
        """
        result = ActivationResult(student_id=student_id, target_folder_id=target_folder_id)

        try:
            siblings = await self.store.list_folders(
                student_id,
                is_active=True,
                exclude_id=target_folder_id,
            )
        except Exception as e:
            logger.warning(
                "Failed to list active folders",
                extra={"student_id": str(student_id), "error": str(e)},
            )
            result.failures.append(DeactivationFailure(folder_id=None, message=str(e)))
            return result

        for folder in siblings:
            try:
                await self.store.update_folder(folder.id, is_active=False)
                result.deactivated_ids.append(folder.id)
            except Exception as e:
                logger.warning(
                    "Failed to deactivate folder",
                    extra={
                        "student_id": str(student_id),
                        "folder_id": str(folder.id),
                        "error": str(e),
                    },
                )
                result.failures.append(DeactivationFailure(folder_id=folder.id, message=str(e)))

        if result.deactivated_ids:
            logger.info(
                f"Deactivated {len(result.deactivated_ids)} folders",
                extra={"student_id": str(student_id)},
            )

        return result

    async def restore(self, result: ActivationResult) -> list[Any]:
        """
        Reactivate the folders an earlier activate() call switched off.

        Used when the folder that was becoming active is never created or
        is rolled back, so the student keeps their previous active folder.

        Args:
            result: Outcome of the activate() call to undo

        Returns:
            list: Folder ids that could not be reactivated
        """
        unrestored = []
        for folder_id in result.deactivated_ids:
            try:
                await self.store.update_folder(folder_id, is_active=True)
            except Exception as e:
                logger.warning(
                    "Failed to reactivate folder",
                    extra={
                        "student_id": str(result.student_id),
                        "folder_id": str(folder_id),
                        "error": str(e),
                    },
                )
                unrestored.append(folder_id)

        restored = len(result.deactivated_ids) - len(unrestored)
        if restored:
            logger.info(
                f"Reactivated {restored} folders",
                extra={"student_id": str(result.student_id)},
            )

        return unrestored

    async def set_active_folder(
        self,
        folder_id: UUID,
        student_id: UUID | None = None,
    ) -> SessionFolderModel:
        """
        Make a folder its student's only active folder.

        Args:
            folder_id: Folder to activate
            student_id: Expected owner (looked up from the folder if None)

        Returns:
            SessionFolderModel: The activated folder

        Raises:
            FolderNotFoundError: If the folder does not exist or belongs to
                another student
        """
        folder = await self.store.set_active_folder(folder_id, student_id=student_id)
        if folder is None:
            raise FolderNotFoundError(folder_id)

        logger.info(
            "Folder set active",
            extra={"folder_id": str(folder_id), "student_id": str(folder.student_id)},
        )
        return folder
