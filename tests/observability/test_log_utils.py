"""
Test suite for structured logging helpers.

System role: Verification of safe log context conversion
"""

import logging
import uuid
from datetime import date

import pytest

from therapy_planner.boundary.db.models.folder_model import FolderStatus
from therapy_planner.core.exceptions import SchedulePersistenceError
from therapy_planner.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)


class TestSafeLogValue:
    """Test suite for safe_log_value()."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, "None"),
            ("text", "text"),
            (42, "42"),
            (FolderStatus.INCOMPLETE, "incomplete"),
            (date(2024, 1, 3), "2024-01-03"),
            ([12, 3, 7], "[3, 7, 12]"),
            ({5}, "[5]"),
            (list(range(1, 24)), "23 ordinals [1..23]"),
            ([True, False], "list(2 items)"),
            (["a", 1], "list(2 items)"),
            ([], "list(0 items)"),
            ({"a": 1}, "dict(1 keys)"),
        ],
    )
    def test_safe_log_value_should_convert(self, value, expected: str) -> None:
        assert safe_log_value(value) == expected

    def test_safe_log_value_should_render_uuids(self) -> None:
        first, second = uuid.uuid4(), uuid.uuid4()

        assert safe_log_value(first) == str(first)
        assert safe_log_value([first, second]) == f"{first}, {second}"

    def test_safe_log_value_should_truncate_long_strings(self) -> None:
        result = safe_log_value("x" * 20, max_length=5)
        assert result == "xxxxx... (truncated, 20 total)"


class TestLogHelpers:
    """Test suite for log_with_context() and log_exception_with_context()."""

    def test_log_with_context_should_attach_extra(self, caplog) -> None:
        logger = logging.getLogger("tests.log_utils")
        folder_id = uuid.uuid4()

        with caplog.at_level(logging.INFO, logger="tests.log_utils"):
            log_with_context(
                logger, logging.INFO, "Batch done", folder_id=folder_id, skipped_ordinals=[2, 1]
            )

        record = caplog.records[-1]
        assert record.getMessage() == "Batch done"
        assert record.folder_id == str(folder_id)
        assert record.skipped_ordinals == "[1, 2]"

    def test_log_exception_with_context_should_record_error_type(self, caplog) -> None:
        logger = logging.getLogger("tests.log_utils")

        with caplog.at_level(logging.ERROR, logger="tests.log_utils"):
            log_exception_with_context(
                logger, "Write failed", RuntimeError("boom"), folder_id="f-1"
            )

        record = caplog.records[-1]
        assert record.error_type == "RuntimeError"
        assert record.error_msg == "boom"
        assert record.folder_id == "f-1"

    def test_log_exception_with_context_should_include_error_details(self, caplog) -> None:
        """Test a persistence error logs its write counts and folder status."""
        logger = logging.getLogger("tests.log_utils")
        error = SchedulePersistenceError(
            "Failed to create folder and sessions: timeout",
            succeeded=11,
            failed=1,
            folder_status=FolderStatus.INCOMPLETE.value,
        )

        with caplog.at_level(logging.ERROR, logger="tests.log_utils"):
            log_exception_with_context(logger, "Schedule persistence failed", error)

        record = caplog.records[-1]
        assert record.error_msg == "Failed to create folder and sessions: timeout"
        assert record.succeeded == "11"
        assert record.failed == "1"
        assert record.folder_status == "incomplete"
        assert record.rolled_back == "False"
