"""Date parsing and rendering helpers for account records."""

import re
from datetime import datetime, timedelta, timezone

from .primitives import to_int

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Remote systems report "never logged in" with placeholder dates; anything
# at or before this instant renders as an empty last-login cell.
LAST_LOGIN_THRESHOLD = datetime(1990, 1, 1, tzinfo=timezone.utc)

_MONTHS = "Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec"
_LAST_RE = re.compile(
    r"(?:\b(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun)\s+)?"
    rf"\b(?P<month>{_MONTHS})\s+(?P<day>\d{{1,2}})\s+"
    r"(?P<time>\d{1,2}:\d{2}:\d{2})\s+(?P<year>\d{4})\b"
)


def days_to_datetime(raw):
    """
    Convert a shadow-style day count since the epoch to a UTC datetime.
    Returns None if the field is empty or not an integer.
    """
    if not isinstance(raw, str):
        return None
    days = to_int(raw)
    if days is None:
        return None
    try:
        return EPOCH + timedelta(days=days)
    except OverflowError:
        return None


def parse_login_time(text):
    """
    Find the first ``[Weekday] Mon D HH:MM:SS YYYY`` run in a line of
    ``last -F`` output and return it as a UTC datetime, or None.
    """
    if not isinstance(text, str):
        return None
    match = _LAST_RE.search(text)
    if not match:
        return None
    stamp = "{month} {day} {time} {year}".format(**match.groupdict())
    try:
        dt = datetime.strptime(stamp, "%b %d %H:%M:%S %Y")
    except ValueError:
        return None
    return dt.replace(tzinfo=timezone.utc)


def format_date(value):
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d")


def format_last_login(value, threshold=LAST_LOGIN_THRESHOLD):
    if value is None or value <= threshold:
        return ""
    return format_date(value)
