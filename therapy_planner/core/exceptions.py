"""
Exception hierarchy for the therapy planner.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class TherapyPlannerException(Exception):
    """Base exception for all therapy planner errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ScheduleValidationError(TherapyPlannerException):
    """Raised when a schedule request is rejected before any write."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message, reported verbatim to the caller
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class FolderNotFoundError(TherapyPlannerException):
    """Raised when a session folder cannot be found."""

    def __init__(self, folder_id: Any, details: dict[str, Any] | None = None) -> None:
        """
        Initialize folder not found error.

        Args:
            folder_id: ID of the missing folder
            details: Additional context
        """
        details = details or {}
        details["folder_id"] = str(folder_id)
        self.folder_id = folder_id
        super().__init__(f"Session folder {folder_id} does not exist", details)


class SchedulePersistenceError(TherapyPlannerException):
    """
    Raised when bulk session creation fails.

    Carries the write counts so callers can see how far the batch got and
    whether the compensating action succeeded.
    """

    def __init__(
        self,
        message: str,
        succeeded: int = 0,
        failed: int = 0,
        skipped: int = 0,
        rolled_back: bool = False,
        folder_id: Any = None,
        folder_status: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize persistence error.

        Args:
            message: Low-level failure message
            succeeded: Session writes that committed
            failed: Session writes that raised
            skipped: Sessions never submitted (cancellation)
            rolled_back: True if all written records were removed again
            folder_id: Folder the sessions belong to
            folder_status: Folder status after compensation (None if deleted)
            details: Additional context
        """
        details = details or {}
        details.update({
            "succeeded": succeeded,
            "failed": failed,
            "skipped": skipped,
            "rolled_back": rolled_back,
            "folder_id": str(folder_id) if folder_id is not None else None,
            "folder_status": folder_status,
        })
        self.succeeded = succeeded
        self.failed = failed
        self.skipped = skipped
        self.rolled_back = rolled_back
        self.folder_id = folder_id
        self.folder_status = folder_status
        super().__init__(message, details)


class FolderRepairError(TherapyPlannerException):
    """Raised when an incomplete folder cannot be repaired."""

    pass
