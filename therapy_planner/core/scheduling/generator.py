"""
Recurring schedule generator.

Turns a weekly recurrence specification into an ordered list of dated
session descriptors. Pure and deterministic: no I/O, no clock access.

Weekday alignment uses a signed delta: each week's occurrence is moved
from the week's base date to the template weekday within the same
Sunday-first week, which can land *before* the base date (and before
the anchor date in week 0). Existing folders were generated this way,
so the rule must not be replaced with "next matching weekday".

Dependencies: datetime
System role: Schedule expansion for bulk folder creation
"""

from datetime import date, timedelta

from therapy_planner.core.scheduling.types import (
    DAYS_OF_WEEK,
    GeneratedSession,
    ScheduleSpec,
)

DEFAULT_TITLE_TEMPLATE = "Session {ordinal}"
DEFAULT_DESCRIPTION_TEMPLATE = "Automatic session - {duration} minutes"


def sunday_first_weekday(day: date) -> int:
    """Weekday index with Sunday=0 .. Saturday=6."""
    return (day.weekday() + 1) % 7


def align_to_weekday(base: date, day_of_week: str) -> date:
    """
    Shift base to the given weekday inside base's Sunday-first week.

    Unknown weekday names leave the date unchanged.
    """
    name = day_of_week.lower()
    if name not in DAYS_OF_WEEK:
        return base
    delta = DAYS_OF_WEEK.index(name) - sunday_first_weekday(base)
    return base + timedelta(days=delta)


def generate(
    spec: ScheduleSpec,
    anchor_date: date,
    folder_name: str,
    title_template: str = DEFAULT_TITLE_TEMPLATE,
    description_template: str = DEFAULT_DESCRIPTION_TEMPLATE,
) -> list[GeneratedSession]:
    """
    Expand a recurrence spec into session descriptors.

    Args:
        spec: Validated schedule specification
        anchor_date: Start date of the folder
        folder_name: Folder name (used only for placeholder text)
        title_template: Format string with {ordinal}
        description_template: Format string with {ordinal} and {duration}

    Returns:
        list[GeneratedSession]: total_weeks * sessions_per_week descriptors
            in ordinal order, session_number not yet encoded
    """
    sessions: list[GeneratedSession] = []

    for week in range(spec.total_weeks):
        base = anchor_date + timedelta(days=week * 7)
        for slot in range(spec.sessions_per_week):
            template = spec.template_for_slot(slot)
            ordinal = week * spec.sessions_per_week + slot + 1
            placeholders = {
                "ordinal": ordinal,
                "duration": template.duration_minutes,
                "folder_name": folder_name,
            }
            sessions.append(
                GeneratedSession(
                    ordinal=ordinal,
                    date=align_to_weekday(base, template.day_of_week),
                    duration_minutes=template.duration_minutes,
                    title=title_template.format(**placeholders),
                    description=description_template.format(**placeholders),
                    day_of_week=template.day_of_week.lower(),
                    time=template.time,
                )
            )

    return sessions
