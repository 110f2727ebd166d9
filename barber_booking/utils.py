"""Shared utilities used across the scheduling core."""

import re
from datetime import date, datetime, time, timedelta, tzinfo


def normalize_phone(value: str) -> str:
    """Normalize a phone number by stripping everything except digits and a leading +.

    Examples:
        >>> normalize_phone("(11) 98765-4321")
        '11987654321'
        >>> normalize_phone("+55 11 98765 4321")
        '+5511987654321'
    """
    value = value.strip()
    if value.startswith("+"):
        return "+" + re.sub(r"[^\d]", "", value[1:])
    return re.sub(r"[^\d]", "", value)


def parse_clock(value: str) -> time:
    """Parse an ``HH:MM`` wall-clock string. Raises ValueError on bad input."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def format_clock(value: time) -> str:
    return value.strftime("%H:%M")


def day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return ``[start, end)`` of a calendar day in the given zone."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start, end
