"""Calendar helpers for proleptic Gregorian dates in UTC."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to timezone-aware UTC, assuming UTC for naive values."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_calendar_date(value: object) -> date:
    """Coerce a date, datetime or ISO-8601 string into a UTC calendar date.

    Raises:
        ValueError: if the value is not a representable calendar date.
    """
    if isinstance(value, datetime):
        return to_utc(value).date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if "T" in text or " " in text:
                return to_utc(datetime.fromisoformat(text)).date()
            return date.fromisoformat(text)
        except ValueError as exc:
            raise ValueError(f"invalid date: {value!r}") from exc
    raise ValueError(f"invalid date: {value!r}")


def day_of_year(day: date) -> int:
    """Return the 1-based ordinal day within the year."""
    return day.timetuple().tm_yday


def days_in_year(year: int) -> int:
    """Return 366 for Gregorian leap years, otherwise 365."""
    return (date(year + 1, 1, 1) - date(year, 1, 1)).days


def date_from_day_of_year(day: int, year: int) -> date:
    """Return the calendar date for a 1-based day-of-year."""
    if day < 1 or day > days_in_year(year):
        raise ValueError(f"day {day} is outside year {year}")
    return date(year, 1, 1) + timedelta(days=day - 1)
