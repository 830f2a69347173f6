"""
Session numbering encoder and resolver.

Session numbers are stored as "<ordinal> - <folder name>". Readers also
meet bare integers and arbitrary strings written by older code, so
decoding is tolerant and never raises.

Dependencies: re
System role: Ordinal <-> session_number conversion
"""

import re
from dataclasses import replace
from typing import Any

from therapy_planner.core.scheduling.types import GeneratedSession

SEPARATOR = " - "

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def encode(ordinal: int, folder_name: str) -> str:
    """
    Build the composite session number.

    Args:
        ordinal: 1-based position within the folder
        folder_name: Folder display name (may itself contain the separator)

    Returns:
        str: "<ordinal> - <folder name>"
    """
    return f"{ordinal}{SEPARATOR}{folder_name}"


def decode(value: Any) -> int:
    """
    Extract the ordinal from a session number.

    Tries the integer prefix before the first separator, then a direct
    integer coercion of the whole value. Anything else resolves to 0.

    Args:
        value: Composite string, bare int, numeric string, None, ...

    Returns:
        int: Decoded ordinal, or 0 when nothing numeric can be found
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value

    if isinstance(value, str):
        match = _LEADING_INT.match(value.split(SEPARATOR, 1)[0])
        if match:
            return int(match.group(1))

    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def display_number(value: Any) -> int | str:
    """
    Display form of a session number.

    Composite values show their ordinal; anything else is shown as stored.
    """
    if isinstance(value, str) and SEPARATOR in value:
        match = _LEADING_INT.match(value.split(SEPARATOR, 1)[0])
        if match:
            return int(match.group(1))
    return value


def number_sessions(
    sessions: list[GeneratedSession],
    folder_name: str,
) -> list[GeneratedSession]:
    """Attach the composite session_number to each generated descriptor."""
    return [
        replace(session, session_number=encode(session.ordinal, folder_name))
        for session in sessions
    ]
