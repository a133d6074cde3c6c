"""Date parsing utilities.

Sheet exports do not agree on a date format, so day/month/year ordering is
inferred from the numbers themselves. Every date is normalized to the
canonical ``YYYY-MM-DD`` form before it is compared or stored.
"""

import calendar
import logging
import re
from dataclasses import dataclass
from datetime import date, timedelta
from functools import cmp_to_key
from typing import Optional

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(r"^(\d{1,4})([/-])(\d{1,4})\2(\d{1,4})$")

DISPLAY_FORMATS = ("DD/MM/YYYY", "MM/DD/YYYY")

_WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


@dataclass(frozen=True)
class ParsedDate:
    """Date components recovered from a date string."""

    year: int
    month: int
    day: int
    original_format: str
    is_valid: bool


def parse_date(date_str: Optional[str]) -> Optional[ParsedDate]:
    """Parse a free-form date string into its components.

    Accepts ``NUM SEP NUM SEP NUM`` where SEP is ``/`` or ``-`` (the same
    separator both times). Ordering is decided as follows:

    - first number above 1000: ``YYYY-MM-DD``
    - third number above 1000: day-first unless the first number cannot
      be a month (then it is the day) or the second cannot be a month
      (then the first is the month). Fully ambiguous dates are day-first.

    Args:
        date_str: Date string

    Returns:
        ParsedDate, or None if the string cannot be dated
    """
    if not date_str or not isinstance(date_str, str):
        return None

    match = _DATE_PATTERN.match(date_str.strip())
    if match is None:
        logger.debug("Unable to parse date: %r", date_str)
        return None

    sep = match.group(2)
    num1, num2, num3 = int(match.group(1)), int(match.group(3)), int(match.group(4))

    if num1 > 1000:
        year, month, day = num1, num2, num3
        detected = f"YYYY{sep}MM{sep}DD"
    elif num3 > 1000:
        year = num3
        if num1 > 12:
            day, month = num1, num2
            detected = f"DD{sep}MM{sep}YYYY"
        elif num2 > 12:
            month, day = num1, num2
            detected = f"MM{sep}DD{sep}YYYY"
        else:
            day, month = num1, num2
            detected = f"DD{sep}MM{sep}YYYY"
    else:
        logger.debug("Unable to determine year in date: %r", date_str)
        return None

    if not is_valid_date(year, month, day):
        logger.debug("Invalid date values %s-%s-%s from %r", year, month, day, date_str)
        return None

    return ParsedDate(year=year, month=month, day=day, original_format=detected, is_valid=True)


def is_valid_date(year: int, month: int, day: int) -> bool:
    """Check calendar bounds, including leap years."""
    if month < 1 or month > 12:
        return False
    if day < 1 or day > 31:
        return False
    if year < 1900 or year > 2100:
        return False
    return day <= calendar.monthrange(year, month)[1]


def to_canonical(date_str: Optional[str]) -> Optional[str]:
    """Normalize a date string to ``YYYY-MM-DD``, or None if unparseable."""
    parsed = parse_date(date_str)
    if parsed is None or not parsed.is_valid:
        return None
    return f"{parsed.year:04d}-{parsed.month:02d}-{parsed.day:02d}"


def to_display(date_str: str, fmt: str = "DD/MM/YYYY") -> str:
    """Render a date for display.

    Unparseable input is returned unchanged. Only the default format reads
    back to the same date: ambiguous input is parsed day-first, so
    ``MM/DD/YYYY`` text such as ``07/05/2024`` reads back as 7 May.
    """
    if fmt not in DISPLAY_FORMATS:
        raise ValueError(
            f"Unknown display format '{fmt}'. Must be one of: {', '.join(DISPLAY_FORMATS)}"
        )

    parsed = parse_date(date_str)
    if parsed is None or not parsed.is_valid:
        return date_str

    if fmt == "MM/DD/YYYY":
        return f"{parsed.month:02d}/{parsed.day:02d}/{parsed.year:04d}"
    return f"{parsed.day:02d}/{parsed.month:02d}/{parsed.year:04d}"


def compare_dates(date1: str, date2: str) -> int:
    """Compare two date strings chronologically.

    Returns -1, 0 or 1. Returns 0 when either side cannot be parsed.
    """
    iso1 = to_canonical(date1)
    iso2 = to_canonical(date2)
    if iso1 is None or iso2 is None:
        return 0
    return (iso1 > iso2) - (iso1 < iso2)


def sort_dates(dates: list[str], descending: bool = True) -> list[str]:
    """Return the dates sorted chronologically (newest first by default).

    Unparseable entries compare equal to everything, so the sort is stable
    around them.
    """
    if descending:
        return sorted(dates, key=cmp_to_key(lambda a, b: compare_dates(b, a)))
    return sorted(dates, key=cmp_to_key(compare_dates))


def resolve_date_argument(date_str: str, today: Optional[date] = None) -> str:
    """Resolve a user-supplied target date to canonical form.

    Supports relative dates as well as anything ``to_canonical`` accepts:
    - "today", "yesterday", "tomorrow"
    - "last monday" ... "last sunday"
    - "this week", "last week" (Monday of that week)
    - "this month", "last month" (first day of that month)

    Raises:
        ValueError: If the date cannot be resolved
    """
    text = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
        "this week": today - timedelta(days=today.weekday()),
        "last week": today - timedelta(days=today.weekday() + 7),
        "this month": today.replace(day=1),
        "last month": (today - relativedelta(months=1)).replace(day=1),
    }
    if text in relative_dates:
        return relative_dates[text].isoformat()

    if text.startswith("last ") and text[5:] in _WEEKDAYS:
        days_ago = (today.weekday() - _WEEKDAYS.index(text[5:])) % 7
        if days_ago == 0:
            days_ago = 7
        return (today - timedelta(days=days_ago)).isoformat()

    canonical = to_canonical(date_str)
    if canonical is None:
        raise ValueError(f"Could not resolve date '{date_str}'")
    return canonical
