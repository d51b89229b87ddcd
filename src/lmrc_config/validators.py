"""Primitive format checks shared by the schema modules.

All functions here are pure predicates: they return ``False`` for anything
malformed, including values of the wrong type, and never raise. Reporting is
left to the schema layer, which knows the field path.
"""

import re
from functools import lru_cache
from typing import Any
from urllib.parse import urlparse
from zoneinfo import available_timezones


TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')
HEX_COLOR_PATTERN = re.compile(r'^#[0-9A-Fa-f]{6}$')
CLUB_ID_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')
# "UTC", "Australia/Sydney", "America/Argentina/Buenos_Aires", "Etc/GMT+10"
TIMEZONE_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9_+\-]*(?:/[A-Za-z0-9_+\-]+)*$')
URL_SCHEME_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*$')

WEEKDAYS = range(0, 7)  # 0=Sunday .. 6=Saturday
WEEKDAY_NAMES = ('Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat')


def is_valid_time_string(value: Any) -> bool:
    """Check for a zero-padded 24-hour ``HH:MM`` time."""
    return isinstance(value, str) and TIME_PATTERN.match(value) is not None

def is_valid_hex_color(value: Any) -> bool:
    """Check for ``#`` followed by exactly six hex digits."""
    return isinstance(value, str) and HEX_COLOR_PATTERN.match(value) is not None

def is_valid_url(value: Any) -> bool:
    """Check that value parses as an absolute URL with a scheme and host."""
    if not isinstance(value, str) or not value or value != value.strip():
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return bool(URL_SCHEME_PATTERN.match(parsed.scheme or '')) and bool(parsed.netloc)

def is_non_empty(value: Any) -> bool:
    """Check for a string with at least one non-whitespace character."""
    return isinstance(value, str) and bool(value.strip())

def is_valid_club_id(value: Any) -> bool:
    """Check for an already-normalized club id (lowercase, digits, hyphens)."""
    return isinstance(value, str) and CLUB_ID_PATTERN.match(value) is not None

def is_valid_timezone(value: Any) -> bool:
    """Check that value names a zone in the IANA tz database.

    The name must also be well formed, so lookalikes such as ``"utc "`` or
    ``"Mars/Olympus"`` are rejected.
    """
    if not isinstance(value, str) or TIMEZONE_PATTERN.match(value) is None:
        return False
    return value in known_timezones()

@lru_cache(maxsize=1)
def known_timezones() -> frozenset[str]:
    """Zone names from the system tz database, or the tzdata package."""
    return frozenset(available_timezones())

def is_valid_weekday(value: Any) -> bool:
    """Check for an integer weekday code in 0-6 (0=Sunday)."""
    return isinstance(value, int) and not isinstance(value, bool) and value in WEEKDAYS

def is_integer(value: Any) -> bool:
    """Check for an int that is not a bool."""
    return isinstance(value, int) and not isinstance(value, bool)

def time_to_minutes(value: str) -> int:
    """Convert a valid ``HH:MM`` string to minutes after midnight."""
    hours, minutes = value.split(':')
    return int(hours) * 60 + int(minutes)

def format_time_12h(value: str) -> str:
    """Render ``HH:MM`` as a 12-hour clock time, e.g. ``06:30`` -> ``6:30 AM``."""
    hours, minutes = (int(part) for part in value.split(':'))
    suffix = 'AM' if hours < 12 else 'PM'
    display_hour = hours % 12 or 12
    return f"{display_hour}:{minutes:02d} {suffix}"
