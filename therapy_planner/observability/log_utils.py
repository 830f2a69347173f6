"""
Logging utilities for structured folder/session logging.

Converts log context to strings before it reaches `extra`, so handlers
never see ORM rows or huge lists. Identifiers, enum statuses and ordinal
lists get a readable form; other collections are summarized by size.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from datetime import date
from enum import Enum
from typing import Any
from uuid import UUID

# Ordinal lists up to this length are logged in full.
MAX_LISTED_ORDINALS = 12


def _format_ordinals(values: list[int]) -> str:
    ordered = sorted(values)
    if len(ordered) <= MAX_LISTED_ORDINALS:
        return "[" + ", ".join(str(v) for v in ordered) + "]"
    return f"{len(ordered)} ordinals [{ordered[0]}..{ordered[-1]}]"


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Safely convert any value to a string for logging.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation

    Examples:
        >>> safe_log_value(FolderStatus.INCOMPLETE)
        'incomplete'
        >>> safe_log_value([12, 3, 7])
        '[3, 7, 12]'
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, Enum):
            val_str = str(value.value)
        elif isinstance(value, str):
            val_str = value
        elif isinstance(value, (UUID, date)):
            val_str = str(value)
        elif isinstance(value, (list, tuple, set, frozenset)):
            items = list(value)
            if items and all(isinstance(v, int) and not isinstance(v, bool) for v in items):
                val_str = _format_ordinals(items)
            elif items and all(isinstance(v, UUID) for v in items):
                val_str = ", ".join(str(v) for v in items)
            else:
                val_str = f"{type(value).__name__}({len(items)} items)"
        elif isinstance(value, dict):
            val_str = f"dict({len(value)} keys)"
        else:
            val_str = str(value)

        if len(val_str) > max_length:
            return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
        return val_str
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """Log a message with every context value passed through safe_log_value()."""
    logger.log(
        level,
        message,
        extra={key: safe_log_value(val) for key, val in context.items()},
    )


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception with its type, message and traceback.

    Domain exceptions contribute their details dict, so a failed batch
    logs its write counts alongside the message.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context
    """
    safe_context = {
        key: safe_log_value(val)
        for key, val in {**getattr(exc, "details", {}), **context}.items()
    }
    safe_context.update({
        "error_type": type(exc).__name__,
        "error_msg": getattr(exc, "message", None) or str(exc),
    })
    logger.error(message, exc_info=exc, extra=safe_context)
