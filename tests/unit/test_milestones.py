"""
Test suite for the milestone resolver.

System role: Verification of middle/final milestone resolution
"""

from types import SimpleNamespace

import pytest

from therapy_planner.boundary.db.models.session_model import SessionStatus
from therapy_planner.core.scheduling.milestones import (
    Milestones,
    is_satisfied,
    milestone_status,
    milestones,
    session_ordinal,
)


class TestMilestones:
    """Test suite for milestones()."""

    @pytest.mark.parametrize(
        "total,middle,final",
        [(0, 0, 0), (1, 1, 1), (2, 1, 2), (10, 5, 10), (11, 6, 11), (23, 12, 23)],
    )
    def test_milestones_should_compute_middle_and_final(
        self, total: int, middle: int, final: int
    ) -> None:
        assert milestones(total) == Milestones(middle_ordinal=middle, final_ordinal=final)


class TestIsSatisfied:
    """Test suite for is_satisfied()."""

    def test_is_satisfied_should_match_decoded_ordinals(self) -> None:
        """Test composite strings and bare ints are both recognised."""
        assert is_satisfied(5, ["1 - Plan", "5 - Plan"])
        assert is_satisfied(5, [5])
        assert not is_satisfied(5, ["50 - Plan", "abc"])

    def test_is_satisfied_should_ignore_zero_milestone(self) -> None:
        """Test undecodable values (ordinal 0) never satisfy an empty folder."""
        assert not is_satisfied(0, ["abc", None])


class TestMilestoneStatus:
    """Test suite for milestone_status()."""

    def test_session_ordinal_should_prefer_ordinal_column(self) -> None:
        assert session_ordinal({"ordinal": 3, "session_number": "9 - X"}) == 3
        assert session_ordinal({"ordinal": None, "session_number": "9 - X"}) == 9
        assert session_ordinal(SimpleNamespace(ordinal=0, session_number=4)) == 4

    def test_milestone_should_flip_with_completion_and_reopen(self) -> None:
        """Test satisfaction follows the current status of the milestone session."""
        # Arrange
        sessions = [
            {"ordinal": i, "session_number": f"{i} - Plan", "status": "locked"}
            for i in range(1, 11)
        ]

        # Act / Assert
        assert not milestone_status(10, sessions).middle_completed

        sessions[4]["status"] = SessionStatus.COMPLETED
        status = milestone_status(10, sessions)
        assert status.middle_ordinal == 5
        assert status.middle_completed
        assert not status.final_completed

        sessions[4]["status"] = SessionStatus.UNLOCKED
        assert not milestone_status(10, sessions).middle_completed

    def test_milestone_should_use_legacy_session_numbers(self) -> None:
        """Test rows without an ordinal resolve through the session number."""
        sessions = [
            SimpleNamespace(ordinal=None, session_number="11", status="completed"),
        ]
        status = milestone_status(11, sessions)
        assert status.final_completed
        assert not status.middle_completed
