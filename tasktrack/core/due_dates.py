"""Due date parsing, composition and overdue computation.

All functions are pure: the current time is always passed in by the caller.
"""

import re
from datetime import date, datetime, time, tzinfo

from tasktrack.core.config import constants


_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIMESTAMP_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}[T ]")


def parse_due_date(value: str) -> date:
    """Parse a calendar date.

    Accepts ``YYYY-MM-DD`` and, for clients that send a full ISO timestamp,
    ``YYYY-MM-DDTHH:MM...`` (only its date part is kept). Week dates and the
    basic ``YYYYMMDD`` form are rejected.

    Raises:
        ValueError: If the value is not a recognizable date
    """
    text = value.strip()
    msg = f"Invalid due date: {value!r}. Expected YYYY-MM-DD"
    try:
        if _DATE_PATTERN.match(text):
            return date.fromisoformat(text)
        if _TIMESTAMP_PATTERN.match(text):
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as e:
        raise ValueError(msg) from e
    raise ValueError(msg)


def parse_due_time(value: str) -> time:
    """Parse a 24h ``HH:MM`` time of day.

    Raises:
        ValueError: If the value is not a valid HH:MM time
    """
    match = _TIME_PATTERN.match(value.strip())
    if not match:
        msg = f"Invalid due time: {value!r}. Expected HH:MM"
        raise ValueError(msg)
    return time(int(match.group(1)), int(match.group(2)))


def compose_due_at(due_date: date | None, due_time: time | None, tz: tzinfo) -> datetime | None:
    """Merge a date and an optional time of day into one due instant.

    Without a date there is no due instant at all. Without a time the
    instant falls at 23:59 local time.
    """
    if due_date is None:
        return None
    time_of_day = due_time if due_time is not None else constants.DEFAULT_DUE_TIME
    return datetime.combine(due_date, time_of_day, tzinfo=tz)


def is_overdue(due_at: datetime | None, now: datetime) -> bool:
    """Return True when a due instant exists and lies before ``now``."""
    if due_at is None:
        return False
    return due_at < now
