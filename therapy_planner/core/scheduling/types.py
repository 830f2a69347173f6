"""
Schedule domain types.

Plain dataclasses passed between the generator, the numbering step and
the batch persister. None of these are persisted directly; the record
fields are derived from GeneratedSession.

Dependencies: dataclasses, datetime
System role: Value objects for schedule generation
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

DAYS_OF_WEEK: tuple[str, ...] = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

MAX_TOTAL_WEEKS = 52
MAX_SESSIONS_PER_WEEK = 7


@dataclass(frozen=True)
class SessionTemplate:
    """Weekly slot template: weekday, start time and duration."""

    day_of_week: str
    duration_minutes: int
    time: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "day_of_week": self.day_of_week,
            "time": self.time,
            "duration_minutes": self.duration_minutes,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionTemplate":
        return cls(
            day_of_week=data["day_of_week"],
            duration_minutes=int(data["duration_minutes"]),
            time=data.get("time"),
        )


@dataclass(frozen=True)
class ScheduleSpec:
    """
    Weekly recurrence specification.

    Attributes:
        total_weeks: Number of weeks to generate (1-52)
        sessions_per_week: Sessions per week (1-7)
        session_templates: Ordered slot templates; slot N uses template N,
            falling back to template 0 when fewer are supplied
    """

    total_weeks: int
    sessions_per_week: int
    session_templates: list[SessionTemplate] = field(default_factory=list)

    @property
    def total_sessions(self) -> int:
        return self.total_weeks * self.sessions_per_week

    def template_for_slot(self, slot: int) -> SessionTemplate:
        if slot < len(self.session_templates):
            return self.session_templates[slot]
        return self.session_templates[0]

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the folder's schedule_spec JSON column."""
        return {
            "total_weeks": self.total_weeks,
            "sessions_per_week": self.sessions_per_week,
            "session_templates": [t.to_dict() for t in self.session_templates],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleSpec":
        return cls(
            total_weeks=int(data["total_weeks"]),
            sessions_per_week=int(data["sessions_per_week"]),
            session_templates=[
                SessionTemplate.from_dict(t) for t in data.get("session_templates", [])
            ],
        )


@dataclass(frozen=True)
class GeneratedSession:
    """
    One concrete occurrence produced by the schedule generator.

    session_number stays None until the numbering step encodes it.
    """

    ordinal: int
    date: date
    duration_minutes: int
    title: str
    description: str
    day_of_week: str
    time: str | None = None
    session_number: str | None = None

    def to_record_fields(self, folder_id: Any, student_id: Any) -> dict[str, Any]:
        """
        Build the flat field map handed to the persistence collaborator.

        Every record starts locked and unpaid with no therapist notes.
        """
        return {
            "folder_id": folder_id,
            "student_id": student_id,
            "ordinal": self.ordinal,
            "session_number": self.session_number,
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "session_time": self.time,
            "duration_minutes": self.duration_minutes,
            "status": "locked",
            "is_paid": False,
            "therapist_notes": None,
        }
