"""
Test suite for the recurring schedule generator.

Tests ordinal contiguity, signed-delta weekday alignment, template
fallback and placeholder text.

System role: Verification of schedule expansion
"""

from datetime import date, timedelta

import pytest

from therapy_planner.core.scheduling.generator import (
    align_to_weekday,
    generate,
    sunday_first_weekday,
)
from therapy_planner.core.scheduling.types import ScheduleSpec, SessionTemplate


def _spec(weeks: int, per_week: int, *days: str) -> ScheduleSpec:
    return ScheduleSpec(
        total_weeks=weeks,
        sessions_per_week=per_week,
        session_templates=[
            SessionTemplate(day_of_week=d, duration_minutes=45) for d in days
        ],
    )


class TestWeekdayAlignment:
    """Test suite for align_to_weekday()."""

    def test_sunday_first_weekday_should_map_sunday_to_zero(self) -> None:
        """Test Sunday is index 0 and Saturday index 6."""
        assert sunday_first_weekday(date(2024, 1, 7)) == 0
        assert sunday_first_weekday(date(2024, 1, 13)) == 6

    def test_align_should_move_backwards_within_week(self) -> None:
        """Test Monday target from a Wednesday lands two days earlier."""
        assert align_to_weekday(date(2024, 1, 3), "monday") == date(2024, 1, 1)

    def test_align_should_move_forwards_within_week(self) -> None:
        """Test Friday target from a Wednesday lands two days later."""
        assert align_to_weekday(date(2024, 1, 3), "Friday") == date(2024, 1, 5)

    def test_align_should_leave_unknown_weekday_unchanged(self) -> None:
        """Test an unknown weekday name keeps the base date."""
        assert align_to_weekday(date(2024, 1, 3), "someday") == date(2024, 1, 3)


class TestGenerate:
    """Test suite for generate()."""

    @pytest.mark.parametrize("weeks,per_week", [(1, 1), (4, 2), (23, 1), (52, 7)])
    def test_generate_should_emit_contiguous_ordinals(
        self, weeks: int, per_week: int, anchor_date: date
    ) -> None:
        """Test weeks x per_week descriptors numbered 1..N without gaps."""
        # Act
        sessions = generate(_spec(weeks, per_week, "monday"), anchor_date, "Folder")

        # Assert
        assert len(sessions) == weeks * per_week
        assert [s.ordinal for s in sessions] == list(range(1, weeks * per_week + 1))
        assert all(s.session_number is None for s in sessions)

    def test_generate_should_place_mondays_seven_days_apart(self, anchor_date: date) -> None:
        """Test four weekly Monday sessions on consecutive Mondays."""
        # Act
        sessions = generate(_spec(4, 1, "monday"), anchor_date, "Folder")

        # Assert
        dates = [s.date for s in sessions]
        assert all(d.weekday() == 0 for d in dates)
        assert all(b - a == timedelta(days=7) for a, b in zip(dates, dates[1:]))

    def test_generate_should_allow_first_date_before_anchor(self, anchor_date: date) -> None:
        """Test week 0 alignment may land before the anchor date."""
        # Act
        sessions = generate(_spec(2, 1, "sunday"), anchor_date, "Folder")

        # Assert
        assert sessions[0].date == date(2023, 12, 31)
        assert sessions[0].date < anchor_date
        assert sessions[1].date == date(2024, 1, 7)

    def test_generate_should_follow_slot_templates(
        self, anchor_date: date, twice_weekly_spec: ScheduleSpec
    ) -> None:
        """Test slot N uses template N with its day, time and duration."""
        # Act
        sessions = generate(twice_weekly_spec, anchor_date, "Folder")

        # Assert
        assert [s.date for s in sessions[:4]] == [
            date(2024, 1, 1),
            date(2024, 1, 4),
            date(2024, 1, 8),
            date(2024, 1, 11),
        ]
        assert sessions[0].time == "10:00"
        assert sessions[1].time == "16:30"
        assert sessions[1].duration_minutes == 60

    def test_generate_should_reuse_first_template_for_missing_slots(
        self, anchor_date: date
    ) -> None:
        """Test three weekly sessions with one template all share it."""
        # Act
        sessions = generate(_spec(1, 3, "tuesday"), anchor_date, "Folder")

        # Assert
        assert len(sessions) == 3
        assert {s.date for s in sessions} == {date(2024, 1, 2)}
        assert {s.duration_minutes for s in sessions} == {45}

    def test_generate_should_be_deterministic(
        self, anchor_date: date, twice_weekly_spec: ScheduleSpec
    ) -> None:
        """Test identical inputs give identical output."""
        first = generate(twice_weekly_spec, anchor_date, "Folder")
        second = generate(twice_weekly_spec, anchor_date, "Folder")
        assert first == second

    def test_generate_should_fill_placeholder_text(self, anchor_date: date) -> None:
        """Test default and custom title/description templates."""
        # Act
        default = generate(_spec(1, 1, "monday"), anchor_date, "Folder")
        custom = generate(
            _spec(1, 1, "monday"),
            anchor_date,
            "Spring",
            title_template="{folder_name} #{ordinal}",
            description_template="{duration} min",
        )

        # Assert
        assert default[0].title == "Session 1"
        assert default[0].description == "Automatic session - 45 minutes"
        assert custom[0].title == "Spring #1"
        assert custom[0].description == "45 min"
