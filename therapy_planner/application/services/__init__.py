"""Service orchestrators."""

from .activation_service import ActivationResult, ActivationService
from .folder_service import FolderService
from .schedule_service import ScheduleCreationResult, ScheduleService

__all__ = [
    "ActivationResult",
    "ActivationService",
    "FolderService",
    "ScheduleCreationResult",
    "ScheduleService",
]
