"""
Schedule creation orchestrator.

Creates a session folder together with all of its recurring sessions:
validate -> deactivate sibling folders (optional) -> create folder ->
generate + number sessions -> batch persist.

Folder and session writes are separate transactions, so a failed batch
leaves partial state behind. The configured failure policy decides the
compensating action: ROLLBACK deletes the sessions written by this call
and the folder; MARK_INCOMPLETE keeps them, flags the folder INCOMPLETE
and leaves it to repair_folder() to write the missing ordinals.

Sibling folders are deactivated before the new folder exists. When the
new folder is never created or is rolled back, those siblings are
reactivated so the student keeps their previous active folder.

Double submission of the same request creates two folders; there is no
idempotency key.

Dependencies: therapy_planner.core.scheduling, therapy_planner.boundary.db
System role: Bulk folder creation use case
"""

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Any
from uuid import UUID

from therapy_planner.application.services.activation_service import (
    ActivationResult,
    ActivationService,
)
from therapy_planner.boundary.db.models.folder_model import FolderStatus, SessionFolderModel
from therapy_planner.boundary.db.record_store import FolderRecordStore
from therapy_planner.configs.scheduling import FailurePolicy, SchedulingSettings
from therapy_planner.core.exceptions import (
    FolderNotFoundError,
    FolderRepairError,
    SchedulePersistenceError,
)
from therapy_planner.core.scheduling.batch_persister import (
    BatchPersister,
    BatchResult,
    BatchStatistics,
    CreatedSession,
)
from therapy_planner.core.scheduling.generator import generate
from therapy_planner.core.scheduling.milestones import session_ordinal
from therapy_planner.core.scheduling.numbering import number_sessions
from therapy_planner.core.scheduling.types import GeneratedSession, ScheduleSpec
from therapy_planner.core.scheduling.validation import validate_schedule_request
from therapy_planner.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
)

logger = logging.getLogger(__name__)


@dataclass
class ScheduleCreationResult:
    """Folder plus the sessions created for it."""

    folder: SessionFolderModel
    sessions: list[CreatedSession]
    statistics: BatchStatistics
    warnings: list[str] = field(default_factory=list)
    activation: ActivationResult | None = None


class ScheduleService:
    """Bulk folder + sessions creation orchestrator."""

    def __init__(
        self,
        store: FolderRecordStore,
        settings: SchedulingSettings | None = None,
        activation_service: ActivationService | None = None,
    ) -> None:
        """
        Initialize schedule service.

        Args:
            store: Folder record store (persistence collaborator)
            settings: Scheduling settings (defaults from environment)
            activation_service: Sibling deactivation (built from store if None)
        """
        self.store = store
        self.settings = settings or SchedulingSettings()
        self.activation_service = activation_service or ActivationService(store)

    def _build_persister(self) -> BatchPersister:
        return BatchPersister(
            writer=self.store,
            batch_size=self.settings.batch_size,
            max_concurrency=self.settings.concurrency_limit,
            retry_attempts=self.settings.write_retry_attempts,
            retry_wait_initial=self.settings.retry_wait_initial,
            retry_wait_max=self.settings.retry_wait_max,
        )

    def _generate(self, spec: ScheduleSpec, anchor: date, folder_name: str) -> list[GeneratedSession]:
        sessions = generate(
            spec,
            anchor,
            folder_name,
            title_template=self.settings.session_title_template,
            description_template=self.settings.session_description_template,
        )
        return number_sessions(sessions, folder_name)

    async def create_schedule(
        self,
        student_id: UUID,
        folder_name: str,
        spec: ScheduleSpec,
        folder_description: str | None = None,
        set_active: bool = False,
        start_date: date | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> ScheduleCreationResult:
        """
        Create a folder and all of its sessions.

        Args:
            student_id: Owning student
            folder_name: Folder name (trimmed; embedded in session numbers)
            spec: Weekly recurrence
            folder_description: Description (defaults to "<weeks> weeks therapy program")
            set_active: Deactivate other folders and make this one active
            start_date: Anchor date (defaults to today)
            cancel_event: Stops submission of further session writes once set

        Returns:
            ScheduleCreationResult: Folder, created sessions, statistics and
                activation warnings

        Raises:
            ScheduleValidationError: Request rejected before any write
            SchedulePersistenceError: Folder or session writes failed
        """
        validate_schedule_request(student_id, folder_name, spec)

        started = time.perf_counter()
        name = folder_name.strip()
        anchor = start_date or date.today()
        folder_id = uuid.uuid4()

        logger.info(
            f"Creating folder '{name}' with {spec.total_sessions} sessions",
            extra={"student_id": str(student_id), "set_active": set_active},
        )

        activation = None
        warnings: list[str] = []
        if set_active:
            activation = await self.activation_service.activate(student_id, folder_id)
            warnings.extend(activation.warnings)

        description = (folder_description or "").strip() or (
            self.settings.folder_description_template.format(weeks=spec.total_weeks)
        )

        try:
            folder = await self.store.create_folder(
                id=folder_id,
                student_id=student_id,
                name=name,
                description=description,
                is_active=set_active,
                status=FolderStatus.ACTIVE,
                total_sessions=spec.total_sessions,
                completed_sessions=0,
                start_date=anchor,
                schedule_spec=spec.to_dict(),
            )
        except Exception as e:
            log_exception_with_context(
                logger, "Failed to create folder", e, student_id=student_id, folder_name=name
            )
            raise SchedulePersistenceError(
                f"Failed to create folder: {e}",
                folder_id=folder_id,
                details=await self._restore_activation(activation),
            ) from e

        descriptors = self._generate(spec, anchor, name)
        fields = [d.to_record_fields(folder.id, student_id) for d in descriptors]

        batch = await self._build_persister().persist(fields, cancel_event=cancel_event)
        if not batch.success:
            await self._compensate(folder, batch, activation)

        statistics = self._operation_statistics(batch, started)
        logger.info(
            f"Created 1 folder + {statistics.sessions_created} sessions "
            f"in {statistics.total_time_ms}ms",
            extra={
                "folder_id": str(folder.id),
                "batches_used": statistics.batches_used,
                "avg_time_per_session_ms": statistics.avg_time_per_session_ms,
            },
        )

        return ScheduleCreationResult(
            folder=folder,
            sessions=batch.created,
            statistics=statistics,
            warnings=warnings,
            activation=activation,
        )

    async def repair_folder(
        self,
        folder_id: UUID,
        cancel_event: asyncio.Event | None = None,
    ) -> ScheduleCreationResult:
        """
        Write the sessions missing from an INCOMPLETE folder.

        Regenerates the schedule from the stored recurrence and start date,
        persists only ordinals that have no record yet and marks the folder
        ACTIVE once every ordinal exists.

        Args:
            folder_id: Folder to repair
            cancel_event: Stops submission of further session writes once set

        Returns:
            ScheduleCreationResult: Folder and the sessions created by this call

        Raises:
            FolderNotFoundError: Folder does not exist
            FolderRepairError: Folder is not INCOMPLETE or has no stored recurrence
            SchedulePersistenceError: Some writes failed again (folder stays INCOMPLETE)
        """
        started = time.perf_counter()
        folder = await self.store.get_folder(folder_id)
        if folder is None:
            raise FolderNotFoundError(folder_id)
        if folder.status != FolderStatus.INCOMPLETE:
            raise FolderRepairError(
                f"Session folder {folder_id} is not incomplete",
                details={"status": folder.status.value},
            )
        if not folder.schedule_spec:
            raise FolderRepairError(
                f"Session folder {folder_id} has no stored schedule to repair from"
            )

        spec = ScheduleSpec.from_dict(folder.schedule_spec)
        existing = await self.store.list_session_records(folder_id)
        present = {session_ordinal(record) for record in existing}

        missing = [
            d for d in self._generate(spec, folder.start_date, folder.name)
            if d.ordinal not in present
        ]
        logger.info(
            f"Repairing folder: {len(missing)} of {spec.total_sessions} sessions missing",
            extra={"folder_id": str(folder_id)},
        )

        fields = [d.to_record_fields(folder.id, folder.student_id) for d in missing]
        batch = await self._build_persister().persist(fields, cancel_event=cancel_event)
        if not batch.success:
            raise SchedulePersistenceError(
                f"Failed to repair folder: {self._failure_message(batch)}",
                succeeded=batch.succeeded,
                failed=batch.failed,
                skipped=len(batch.skipped),
                rolled_back=False,
                folder_id=folder_id,
                folder_status=FolderStatus.INCOMPLETE.value,
            )

        folder = await self.store.update_folder(folder_id, status=FolderStatus.ACTIVE) or folder
        return ScheduleCreationResult(
            folder=folder,
            sessions=batch.created,
            statistics=self._operation_statistics(batch, started),
        )

    async def _compensate(
        self,
        folder: SessionFolderModel,
        batch: BatchResult,
        activation: ActivationResult | None = None,
    ) -> None:
        """
        Apply the failure policy, then raise SchedulePersistenceError.

        A rolled-back folder never became active, so folders deactivated
        on its behalf are switched back on.
        """
        message = self._failure_message(batch)
        policy = self.settings.failure_policy
        rolled_back = False
        folder_status: str | None = FolderStatus.ACTIVE.value

        if policy == FailurePolicy.ROLLBACK:
            try:
                await self.store.delete_session_records([s.id for s in batch.created])
                await self.store.delete_folder(folder.id)
                rolled_back = True
                folder_status = None
                log_with_context(
                    logger,
                    logging.WARNING,
                    "Rolled back partial folder creation",
                    folder_id=folder.id,
                    sessions_removed=batch.succeeded,
                    skipped_ordinals=batch.skipped,
                )
            except Exception as e:
                log_exception_with_context(
                    logger, "Rollback of partial folder creation failed", e, folder_id=folder.id
                )
                folder_status = await self._mark_incomplete(folder.id)
        else:
            folder_status = await self._mark_incomplete(folder.id)

        details = {"sessions_written": batch.succeeded}
        if rolled_back:
            details.update(await self._restore_activation(activation))

        raise SchedulePersistenceError(
            f"Failed to create folder and sessions: {message}",
            succeeded=0 if rolled_back else batch.succeeded,
            failed=batch.failed,
            skipped=len(batch.skipped),
            rolled_back=rolled_back,
            folder_id=folder.id,
            folder_status=folder_status,
            details=details,
        )

    async def _restore_activation(self, activation: ActivationResult | None) -> dict[str, Any]:
        if activation is None or not activation.deactivated_ids:
            return {}
        unrestored = await self.activation_service.restore(activation)
        return {
            "reactivated_folders": len(activation.deactivated_ids) - len(unrestored),
            "unrestored_folder_ids": [str(folder_id) for folder_id in unrestored],
        }

    async def _mark_incomplete(self, folder_id: Any) -> str | None:
        try:
            await self.store.update_folder(folder_id, status=FolderStatus.INCOMPLETE)
        except Exception as e:
            log_exception_with_context(
                logger, "Failed to mark folder incomplete", e, folder_id=folder_id
            )
            return None
        logger.warning("Folder marked incomplete", extra={"folder_id": str(folder_id)})
        return FolderStatus.INCOMPLETE.value

    @staticmethod
    def _failure_message(batch: BatchResult) -> str:
        if batch.first_error_message:
            return batch.first_error_message
        if batch.cancelled:
            return "session creation cancelled"
        return "session creation incomplete"

    @staticmethod
    def _operation_statistics(batch: BatchResult, started: float) -> BatchStatistics:
        elapsed_ms = int(round((time.perf_counter() - started) * 1000))
        created = batch.statistics.sessions_created
        return BatchStatistics(
            sessions_created=created,
            total_time_ms=elapsed_ms,
            batches_used=batch.statistics.batches_used,
            avg_time_per_session_ms=round(elapsed_ms / created) if created else 0,
        )
