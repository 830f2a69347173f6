"""
Schedule request validation.

Business rules checked before any write. Messages are returned to the
caller verbatim, so keep them user-facing.

Dependencies: therapy_planner.core.exceptions
System role: Fail-fast guard for bulk schedule creation
"""

import re

from therapy_planner.core.exceptions import ScheduleValidationError
from therapy_planner.core.scheduling.types import (
    DAYS_OF_WEEK,
    MAX_SESSIONS_PER_WEEK,
    MAX_TOTAL_WEEKS,
    ScheduleSpec,
)

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_schedule_spec(spec: ScheduleSpec) -> None:
    """
    Validate a recurrence specification.

    Args:
        spec: Schedule specification to check

    Raises:
        ScheduleValidationError: On the first rule that fails
    """
    if not 1 <= spec.total_weeks <= MAX_TOTAL_WEEKS:
        raise ScheduleValidationError(
            f"Total weeks must be between 1 and {MAX_TOTAL_WEEKS}",
            field="total_weeks",
        )

    if not 1 <= spec.sessions_per_week <= MAX_SESSIONS_PER_WEEK:
        raise ScheduleValidationError(
            f"Sessions per week must be between 1 and {MAX_SESSIONS_PER_WEEK}",
            field="sessions_per_week",
        )

    if not spec.session_templates:
        raise ScheduleValidationError(
            "At least one session template is required",
            field="session_templates",
        )

    for index, template in enumerate(spec.session_templates):
        if template.day_of_week.lower() not in DAYS_OF_WEEK:
            raise ScheduleValidationError(
                f"Session template {index + 1} has an unknown day of week: "
                f"{template.day_of_week!r}",
                field="session_templates",
            )
        if template.duration_minutes <= 0:
            raise ScheduleValidationError(
                f"Session template {index + 1} must have a positive duration",
                field="session_templates",
            )
        if template.time is not None and not _TIME_PATTERN.match(template.time):
            raise ScheduleValidationError(
                f"Session template {index + 1} time must use HH:MM format",
                field="session_templates",
            )


def validate_schedule_request(
    student_id: object,
    folder_name: str | None,
    spec: ScheduleSpec | None,
) -> None:
    """
    Validate the full bulk creation request.

    Raises:
        ScheduleValidationError: If a required field is missing or the
            recurrence specification is out of range
    """
    if not student_id or not folder_name or not folder_name.strip() or spec is None:
        raise ScheduleValidationError("Missing required parameters")

    validate_schedule_spec(spec)
