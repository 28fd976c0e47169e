"""Date and time utility functions."""
from datetime import date, datetime, time, timedelta
from typing import Tuple

import pytz
from constants import DATE_FORMAT_ISO
from exceptions import ValidationError


def parse_iso_date(value: str, field_name: str = "date") -> date:
    """
    Parse a YYYY-MM-DD string.

    Args:
        value: Date string
        field_name: Name of field for error message

    Returns:
        Parsed date

    Raises:
        ValidationError: If the string is not a valid YYYY-MM-DD date
    """
    if not value:
        raise ValidationError(f"{field_name} is required")

    try:
        return datetime.strptime(value.strip(), DATE_FORMAT_ISO).date()
    except ValueError as e:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date, got {value!r}") from e


def to_calendar_date(
    value: date | datetime,
    timezone_str: str = "UTC"
) -> date:
    """
    Reduce a timestamp to the calendar date it falls on in the yard.

    Naive datetimes are taken to be yard-local already; aware ones are
    converted to the yard timezone first.

    Args:
        value: Date or datetime
        timezone_str: Yard timezone

    Returns:
        Calendar date
    """
    if not isinstance(value, datetime):
        return value

    if value.tzinfo is None:
        return value.date()

    return value.astimezone(pytz.timezone(timezone_str)).date()


def days_inclusive(start: date, end: date) -> int:
    """
    Count calendar days from start to end, both ends included.

    Returns 0 when end is before start.
    """
    if end < start:
        return 0
    return (end - start).days + 1


def day_bounds(start: date, end: date) -> Tuple[datetime, datetime]:
    """
    Half-open datetime bounds [start 00:00, end+1 00:00) covering whole days.

    Lets timestamp columns be compared by calendar date without wrapping
    them in a DATE() call.
    """
    return (
        datetime.combine(start, time.min),
        datetime.combine(end + timedelta(days=1), time.min),
    )

