"""
Test suite for session number encoding and decoding.

System role: Verification of ordinal <-> session_number conversion
"""

from datetime import date

import pytest

from therapy_planner.core.scheduling.numbering import (
    decode,
    display_number,
    encode,
    number_sessions,
)
from therapy_planner.core.scheduling.types import GeneratedSession


class TestEncodeDecode:
    """Test suite for encode() and decode()."""

    def test_encode_should_join_ordinal_and_name(self) -> None:
        """Test composite format."""
        assert encode(7, "Autumn plan") == "7 - Autumn plan"

    @pytest.mark.parametrize("name", ["Plan", "A - B - C", " - ", ""])
    def test_decode_should_recover_ordinal_for_any_name(self, name: str) -> None:
        """Test names containing the separator still decode to the ordinal."""
        assert decode(encode(12, name)) == 12

    @pytest.mark.parametrize(
        "value,expected",
        [
            (5, 5),
            ("5", 5),
            (" 8 ", 8),
            ("3abc", 3),
            ("12 - ", 12),
            (4.0, 4),
        ],
    )
    def test_decode_should_accept_legacy_values(self, value, expected: int) -> None:
        """Test bare ints, numeric strings and leading-int strings."""
        assert decode(value) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "abc", "Session - 4", True, object(), [], {"n": 1}, float("nan"), float("inf")],
    )
    def test_decode_should_never_raise(self, value) -> None:
        """Test malformed input degrades to ordinal 0."""
        assert decode(value) == 0


class TestDisplayNumber:
    """Test suite for display_number()."""

    def test_display_number_should_show_ordinal_of_composite(self) -> None:
        assert display_number("10 - Plan") == 10

    def test_display_number_should_pass_through_legacy_values(self) -> None:
        assert display_number(3) == 3
        assert display_number("intro") == "intro"


class TestNumberSessions:
    """Test suite for number_sessions()."""

    def test_number_sessions_should_attach_composite_numbers(self) -> None:
        """Test each descriptor gets '<ordinal> - <folder>'."""
        # Arrange
        sessions = [
            GeneratedSession(
                ordinal=i,
                date=date(2024, 1, i),
                duration_minutes=45,
                title=f"Session {i}",
                description="",
                day_of_week="monday",
            )
            for i in (1, 2)
        ]

        # Act
        numbered = number_sessions(sessions, "Plan")

        # Assert
        assert [s.session_number for s in numbered] == ["1 - Plan", "2 - Plan"]
        assert sessions[0].session_number is None
