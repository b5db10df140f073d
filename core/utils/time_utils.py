"""
Time formatting and parsing utilities
"""
import re
from datetime import datetime, timedelta, timezone
from typing import Optional


_UNIT_SECONDS = {
    "second": 1,
    "minute": 60,
    "hour": 3600,
    "day": 86400,
    "week": 7 * 86400,
}

_TERM_PATTERN = re.compile(r"(\d+)\s*([a-z]+?)s?\b")


def utc_now() -> datetime:
    """
    Current UTC time as a naive datetime

    Timestamps in the report tables are stored without timezone, in UTC.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_max_age(age_str: str) -> timedelta:
    """
    Parse a max age string to timedelta

    Supports formats:
        - "90" -> 90 days
        - "90 days" -> 90 days
        - "1 day 12 hours" -> 36 hours
        - "30 minutes", "2 weeks", "3600 seconds"

    Args:
        age_str: Max age string

    Returns:
        Max age as timedelta

    Raises:
        ValueError: If the string can't be parsed or the age isn't positive
    """
    text = age_str.strip().lower()

    # Simple number (days)
    if text.isdigit():
        days = int(text)
        if days <= 0:
            raise ValueError(f"Max age must be positive: {age_str}")
        return timedelta(days=days)

    total_seconds = 0
    position = 0
    for match in _TERM_PATTERN.finditer(text):
        # Only whitespace is allowed between terms
        if text[position:match.start()].strip():
            raise ValueError(f"Invalid max age format: {age_str}")
        unit = match.group(2)
        if unit not in _UNIT_SECONDS:
            raise ValueError(f"Unknown time unit '{unit}' in max age: {age_str}")
        total_seconds += int(match.group(1)) * _UNIT_SECONDS[unit]
        position = match.end()

    if position == 0 or text[position:].strip():
        raise ValueError(f"Invalid max age format: {age_str}")
    if total_seconds <= 0:
        raise ValueError(f"Max age must be positive: {age_str}")

    return timedelta(seconds=total_seconds)


def format_age(reported_at: datetime, now: Optional[datetime] = None) -> str:
    """
    Format age of a report in whole days

    Args:
        reported_at: Report timestamp
        now: Reference time (defaults to current UTC time)

    Returns:
        Formatted string like "42 days" or "1 day"
    """
    if now is None:
        now = utc_now()

    days = (now - reported_at).days
    return f"{days} day" if days == 1 else f"{days} days"
