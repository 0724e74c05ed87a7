"""Calendar-date helpers shared by the derivation engine."""
import logging
from datetime import date, datetime, timezone
from typing import Any, Optional


logger = logging.getLogger(__name__)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def parse_date(value: Any) -> Optional[date]:
    """
    Coerce a stored date value into a calendar date.

    Args:
        value: date, datetime, ISO string or None

    Returns:
        The calendar date, or None when the value is absent or unparseable

    Examples:
        >>> parse_date("2025-03-14")
        datetime.date(2025, 3, 14)
        >>> parse_date("2025-03-14T18:30:00Z")
        datetime.date(2025, 3, 14)
        >>> parse_date("next tuesday") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass

    logger.debug("Ignoring unparseable date value %r", value)
    return None


def parse_datetime(value: Any) -> Optional[datetime]:
    """Coerce a timestamp into a naive datetime, or None when unusable."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value
    parsed = parse_date(value)
    if parsed is None:
        return None
    return datetime.combine(parsed, datetime.min.time())


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative when end is earlier)."""
    return (end - start).days


def month_key(value: date) -> str:
    """Year-month key, e.g. '2025-03'."""
    return f"{value.year:04d}-{value.month:02d}"


def month_label(value: date) -> str:
    """Short display label, e.g. 'Mar 2025'."""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"


def shift_month(value: date, months: int) -> date:
    """First day of the month `months` away from value's month."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def trailing_months(today: date, count: int) -> list[date]:
    """
    First days of the `count` months ending at today's month, oldest first.

    Examples:
        >>> trailing_months(date(2025, 2, 20), 3)
        [datetime.date(2024, 12, 1), datetime.date(2025, 1, 1), datetime.date(2025, 2, 1)]
    """
    return [shift_month(today, -offset) for offset in range(count - 1, -1, -1)]
