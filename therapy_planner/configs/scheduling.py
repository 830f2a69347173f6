"""
Scheduling configuration settings.

Tunables for bulk schedule creation: reporting batch size, worker pool
size, per-write retry policy, failure compensation and placeholder text.

Dependencies: pydantic, pydantic_settings
System role: Schedule generation and batch persistence configuration
"""

from enum import Enum

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from therapy_planner.configs.base import BaseSettings


class FailurePolicy(str, Enum):
    """Compensating action applied when a bulk session write fails."""

    ROLLBACK = "rollback"
    MARK_INCOMPLETE = "mark_incomplete"


class SchedulingSettings(BaseSettings):
    """Bulk folder creation configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SCHEDULING_",
        case_sensitive=False,
        extra="ignore",
    )

    batch_size: int = Field(
        default=10,
        ge=1,
        description="Sessions per reporting batch",
    )
    max_concurrency: int = Field(
        default=5,
        ge=0,
        description="Concurrent session writes (0 = unbounded fan-out)",
    )
    write_retry_attempts: int = Field(
        default=1,
        ge=1,
        description="Attempts per session write (1 = no retry)",
    )
    retry_wait_initial: float = Field(default=0.5, description="Initial retry backoff in seconds")
    retry_wait_max: float = Field(default=5.0, description="Maximum retry backoff in seconds")

    failure_policy: FailurePolicy = Field(
        default=FailurePolicy.ROLLBACK,
        description="Compensation when session writes fail (rollback, mark_incomplete)",
    )

    session_title_template: str = Field(
        default="Session {ordinal}",
        description="Placeholder title for generated sessions",
    )
    session_description_template: str = Field(
        default="Automatic session - {duration} minutes",
        description="Placeholder description for generated sessions",
    )
    folder_description_template: str = Field(
        default="{weeks} weeks therapy program",
        description="Folder description used when none is supplied",
    )

    @property
    def concurrency_limit(self) -> int | None:
        """
        Worker pool size for batch persistence.

        Returns:
            int | None: Pool size, or None for unbounded fan-out
        """
        return self.max_concurrency or None
