"""Schedule Dates — civil-date arithmetic for reschedule and month duplication.

Invariants:
    - All instants are interpreted in UTC; naive datetimes are assumed UTC
    - normalize_to_day() returns midnight UTC of the value's UTC calendar day
    - duplication_dates() compares civil dates, never instants: a source at
      10:00 on the 28th with interval 2 still yields the 30th
    - Repeat interval is an int in [MIN_REPEAT_INTERVAL, MAX_REPEAT_INTERVAL]

Design Decisions:
    - Civil dates over local-time mutation: no timezone-dependent off-by-one at
      month boundaries
    - Generated dates keep the source's UTC time-of-day so duplicates sort like the source
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone

from calnotes.core.domain_types import MAX_REPEAT_INTERVAL, MIN_REPEAT_INTERVAL
from calnotes.core.errors import NoteValidationError


def to_utc(value: datetime | date | str) -> datetime:
    """Coerce a datetime, date or ISO-8601 string to an aware UTC datetime."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise NoteValidationError(
                f"Invalid assigned_date: {value!r}", "assigned_date",
            )
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise NoteValidationError(
        f"Invalid assigned_date type: {type(value).__name__}", "assigned_date",
    )


def normalize_to_day(value: datetime | date | str | None) -> datetime:
    """Midnight UTC of the value's calendar day. None is a validation error."""
    if value is None or value == "":
        raise NoteValidationError("Missing assigned_date", "assigned_date")
    utc = to_utc(value)
    return datetime.combine(utc.date(), time.min, tzinfo=timezone.utc)


def end_of_month(day: date) -> date:
    """Last civil day of day's month."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=last)


def validate_repeat_interval(value: object) -> int:
    """Return value if it is an int in the allowed range, else raise."""
    if (
        isinstance(value, bool)
        or not isinstance(value, int)
        or not MIN_REPEAT_INTERVAL <= value <= MAX_REPEAT_INTERVAL
    ):
        raise NoteValidationError(
            f"Invalid repeat interval ({MIN_REPEAT_INTERVAL}-{MAX_REPEAT_INTERVAL} allowed)",
            "repeat_interval",
        )
    return value


def duplication_dates(original: datetime | date | str, repeat_interval: int) -> list[datetime]:
    """Dates original + k*interval (k >= 1) up to and including the month's last day."""
    interval = validate_repeat_interval(repeat_interval)
    source = to_utc(original)
    source_day = source.date()
    # offsets stay within the month, so date.max is never exceeded
    days_left = (end_of_month(source_day) - source_day).days
    return [
        datetime.combine(source_day + timedelta(days=offset), source.timetz())
        for offset in range(interval, days_left + 1, interval)
    ]
