"""
Observability module.

Provides logging configuration, structured log helpers and request
logging middleware.
"""

from therapy_planner.observability.log_utils import (
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)
from therapy_planner.observability.logger import configure_logging

__all__ = [
    "configure_logging",
    "log_exception_with_context",
    "log_with_context",
    "safe_log_value",
]
