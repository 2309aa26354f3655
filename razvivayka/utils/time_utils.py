"""
razvivayka/utils/time_utils.py

Purpose: Time and offset helpers

- City → UTC offset lookup with fallback
- Local wall-clock formatting for the reminder scan
- ISO timestamps for user records
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from razvivayka.utils.constants import TIMEZONE_OFFSETS, DEFAULT_OFFSET_HOURS


def utc_now() -> datetime:
    """
    Returns the current timezone-aware UTC time.
    """
    return datetime.now(timezone.utc)


def iso_now() -> str:
    """
    Returns the current UTC time as an ISO-8601 string.
    """
    return utc_now().isoformat()


def get_offset(city: Optional[str]) -> int:
    """
    Returns the UTC offset in hours for a city.
    Unknown or missing cities fall back to the default offset.
    """
    if city is None:
        return DEFAULT_OFFSET_HOURS
    return TIMEZONE_OFFSETS.get(city, DEFAULT_OFFSET_HOURS)


def local_time(now: datetime, city: Optional[str]) -> datetime:
    """
    Shifts a UTC instant into the city's wall-clock time.
    """
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return now + timedelta(hours=get_offset(city))


def local_hhmm(now: datetime, city: Optional[str]) -> str:
    """
    Formats the city's wall-clock time as HH:MM.
    """
    return local_time(now, city).strftime("%H:%M")
