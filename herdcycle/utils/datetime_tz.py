from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo

DateLike = date | datetime | str


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(dt: datetime, tz: tzinfo = timezone.utc) -> datetime:
    """Convert a datetime to UTC, assuming `tz` for naive values."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return dt.astimezone(timezone.utc)


def localize(dt: datetime | None, tz: tzinfo) -> datetime | None:
    return to_utc(dt, tz) if dt is not None else None


def ensure_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def parse_datetime(value: DateLike) -> datetime:
    """Accept a date, datetime or ISO string (optional trailing 'Z').

    Raises ValueError when the value cannot be interpreted as a date.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time(0, 0))
    if isinstance(value, str):
        s = value.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(s)
        except ValueError:
            return datetime.combine(date.fromisoformat(s), time(0, 0))
    raise ValueError(f"Unsupported date value: {value!r}")


def to_day(value: DateLike) -> date:
    """Truncate to the calendar day.

    Aware datetimes are normalised to UTC first so the same instant always
    lands on the same day regardless of the offset it was stored with.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None and value.tzinfo.utcoffset(value) is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    return to_day(parse_datetime(value))


def days_between(target: DateLike, ref: DateLike) -> int:
    """Signed whole days from `ref` to `target`, ignoring time-of-day and DST."""
    return (to_day(target) - to_day(ref)).days


def add_days(value: datetime, days: int) -> datetime:
    return value + timedelta(days=days)


def add_months(value: datetime, months: int) -> datetime:
    """Increment the month field by `months`.

    A day that does not exist in the target month rolls forward into the
    next one (Jan 31 + 1 month -> Mar 2/3), the same way a calendar
    "month field" increment behaves.
    """
    years, month_index = divmod(value.month - 1 + months, 12)
    first = value.replace(year=value.year + years, month=month_index + 1, day=1)
    return first + timedelta(days=value.day - 1)


def start_of_week(day: date) -> date:
    """Sunday on or before `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def month_bounds(day: date) -> tuple[date, date]:
    first = day.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return first, next_first - timedelta(days=1)


def local_midday(day: date) -> datetime:
    """Naive 12:00 on `day`; serialises without shifting to a neighbour day."""
    return datetime.combine(day, time(12, 0))
