"""
Milestone resolver.

Derives the middle and final milestone ordinals of a folder and checks
them against the current set of completed sessions. Nothing here is
cached: callers pass the sessions they just read, so reopening a
completed milestone session flips it back to unsatisfied.

Dependencies: therapy_planner.core.scheduling.numbering
System role: Reward unlock checks for read paths
"""

from dataclasses import dataclass
from typing import Any, Iterable

from therapy_planner.core.scheduling.numbering import decode

COMPLETED_STATUS = "completed"


@dataclass(frozen=True)
class Milestones:
    """Middle and final milestone ordinals of a folder."""

    middle_ordinal: int
    final_ordinal: int


@dataclass(frozen=True)
class MilestoneStatus:
    """Milestone ordinals with their current satisfaction flags."""

    middle_ordinal: int
    final_ordinal: int
    middle_completed: bool
    final_completed: bool


def milestones(total_count: int) -> Milestones:
    """
    Compute milestone ordinals for a folder of total_count sessions.

    Args:
        total_count: Number of sessions in the folder

    Returns:
        Milestones: middle = floor((total - 1) / 2) + 1, final = total;
            both equal total_count when it is 1 or less
    """
    if total_count <= 1:
        return Milestones(middle_ordinal=total_count, final_ordinal=total_count)
    return Milestones(
        middle_ordinal=(total_count - 1) // 2 + 1,
        final_ordinal=total_count,
    )


def is_satisfied(milestone_ordinal: int, completed_sessions: Iterable[Any]) -> bool:
    """
    Check whether a milestone session has been completed.

    Args:
        milestone_ordinal: Ordinal to look for
        completed_sessions: Session numbers (composite strings, ints or
            legacy values) of sessions whose status is completed

    Returns:
        bool: True if any decoded ordinal equals milestone_ordinal
    """
    if milestone_ordinal < 1:
        return False
    return any(decode(number) == milestone_ordinal for number in completed_sessions)


def _field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def session_ordinal(record: Any) -> int:
    """
    Ordinal of a session record or mapping.

    Prefers the integer ordinal column and falls back to decoding the
    session_number for rows written without one.
    """
    ordinal = _field(record, "ordinal")
    if isinstance(ordinal, int) and not isinstance(ordinal, bool) and ordinal > 0:
        return ordinal
    return decode(_field(record, "session_number"))


def _status_value(record: Any) -> str | None:
    status = _field(record, "status")
    return getattr(status, "value", status)


def milestone_status(total_count: int, sessions: Iterable[Any]) -> MilestoneStatus:
    """
    Resolve milestone flags from the current sessions of a folder.

    Args:
        total_count: Number of sessions in the folder
        sessions: Session records or dicts with status and ordinal or
            session_number

    Returns:
        MilestoneStatus: Ordinals and completion flags
    """
    targets = milestones(total_count)
    completed = [
        session_ordinal(session)
        for session in sessions
        if _status_value(session) == COMPLETED_STATUS
    ]
    return MilestoneStatus(
        middle_ordinal=targets.middle_ordinal,
        final_ordinal=targets.final_ordinal,
        middle_completed=is_satisfied(targets.middle_ordinal, completed),
        final_completed=is_satisfied(targets.final_ordinal, completed),
    )
