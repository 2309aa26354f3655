"""
razvivayka/utils/validation_utils.py

Purpose: Input validation

- HH:MM reminder time validation and normalization
- City and reminder type membership checks
"""

import re
from typing import Optional

from razvivayka.utils.constants import TIME_PATTERN, TIMEZONE_OFFSETS, REMINDER_MESSAGES

_TIME_RE = re.compile(TIME_PATTERN)


def validate_time(value: Optional[str]) -> bool:
    """
    Validates a reminder time against HH:MM (hour 0-23, minute 0-59).
    A single-digit hour is accepted ("8:15").

    Args:
        value: Raw time string

    Returns:
        True if valid, False otherwise
    """
    if not value:
        return False
    return _TIME_RE.match(value) is not None


def normalize_time(value: str) -> str:
    """
    Zero-pads a valid time string so it compares equal to strftime("%H:%M").

    Raises:
        ValueError: If the value is not a valid HH:MM time
    """
    value = value.strip()
    if not validate_time(value):
        raise ValueError(f"Invalid time: {value!r}")
    hour, minute = value.split(":")
    return f"{int(hour):02d}:{minute}"


def is_known_city(city: Optional[str]) -> bool:
    return city in TIMEZONE_OFFSETS


def is_known_reminder_type(reminder_type: Optional[str]) -> bool:
    return reminder_type in REMINDER_MESSAGES
