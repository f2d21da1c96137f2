"""Date parsing utilities for the command line."""

from datetime import date, datetime, time, timedelta, UTC
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def _period_start(period: str, today: date, offset: int) -> Optional[date]:
    """Start of the week/month/year ``offset`` periods away from today."""
    if period == "week":
        return today - timedelta(days=today.weekday()) + timedelta(weeks=offset)
    if period == "month":
        return today.replace(day=1) + relativedelta(months=offset)
    if period == "year":
        return today.replace(month=1, day=1) + relativedelta(years=offset)
    return None


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "15 Jan 2024") and relative ones:
    "today", "yesterday", "tomorrow", "this/last/next week|month|year" and
    "last <weekday>".

    Args:
        date_str: Date string in various formats
        today: Reference date for relative expressions (defaults to today)

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = today or datetime.now(UTC).date()

    relative_days = {"today": 0, "yesterday": -1, "tomorrow": 1}
    if text in relative_days:
        return today + timedelta(days=relative_days[text])

    prefix, _, period = text.partition(" ")
    offsets = {"last": -1, "this": 0, "next": 1}
    if prefix in offsets and period:
        start = _period_start(period, today, offsets[prefix])
        if start is not None:
            return start
        if prefix == "last" and period in WEEKDAYS:
            days_ago = (today.weekday() - WEEKDAYS.index(period)) % 7 or 7
            return today - timedelta(days=days_ago)

    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}") from e


def to_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def parse_datetime(date_str: str, today: Optional[date] = None) -> datetime:
    """Parse a date or timestamp string into an aware UTC datetime.

    Bare dates and relative words resolve to midnight UTC of that day. Full
    timestamps keep their time and are converted to UTC.
    """
    text = date_str.strip()
    if "t" in text.lower() and any(c.isdigit() for c in text):
        try:
            return to_utc(date_parser.isoparse(text))
        except ValueError:
            pass
    return start_of_day(parse_date(text, today=today))
