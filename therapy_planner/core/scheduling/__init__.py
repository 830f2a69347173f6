"""
Schedule generation, numbering, milestones and batch persistence.

Exports:
  - ScheduleSpec, SessionTemplate, GeneratedSession: Schedule value objects
  - generate(): Expand a weekly recurrence into dated sessions
  - encode(), decode(), number_sessions(): Session number handling
  - milestones(), is_satisfied(), milestone_status(): Milestone resolution
  - BatchPersister, BatchResult: Concurrent session writes
"""

from therapy_planner.core.scheduling.batch_persister import (
    BatchPersister,
    BatchResult,
    BatchStatistics,
    CreatedSession,
    SessionWriteFailure,
    partition,
)
from therapy_planner.core.scheduling.generator import generate
from therapy_planner.core.scheduling.milestones import (
    MilestoneStatus,
    Milestones,
    is_satisfied,
    milestone_status,
    milestones,
)
from therapy_planner.core.scheduling.numbering import (
    decode,
    display_number,
    encode,
    number_sessions,
)
from therapy_planner.core.scheduling.types import (
    DAYS_OF_WEEK,
    GeneratedSession,
    ScheduleSpec,
    SessionTemplate,
)
from therapy_planner.core.scheduling.validation import (
    validate_schedule_request,
    validate_schedule_spec,
)

__all__ = [
    "BatchPersister",
    "BatchResult",
    "BatchStatistics",
    "CreatedSession",
    "SessionWriteFailure",
    "partition",
    "generate",
    "MilestoneStatus",
    "Milestones",
    "is_satisfied",
    "milestone_status",
    "milestones",
    "decode",
    "display_number",
    "encode",
    "number_sessions",
    "DAYS_OF_WEEK",
    "GeneratedSession",
    "ScheduleSpec",
    "SessionTemplate",
    "validate_schedule_request",
    "validate_schedule_spec",
]
