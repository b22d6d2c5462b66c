"""Calendar helpers for financial reporting.

Inputs may be ``date``/``datetime`` objects, ISO-8601 strings or POSIX
timestamps. Missing or unparseable inputs never raise: formatters return an
empty string, predicates return ``False`` and arithmetic returns ``None``.
The clock is read only when ``now``/``today`` is not supplied.
"""

from __future__ import annotations

import calendar
import math
from datetime import date, datetime, timedelta
from typing import Union

from fincore.logging_config import get_logger
from fincore.models import DEFAULT_DATE_FORMAT, FINANCIAL_YEAR_START_MONTH

logger = get_logger(__name__)

DateLike = Union[date, datetime, str, int, float, None]

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

DATE_FORMATS = ("dd/mm/yyyy", "mm/dd/yyyy", "yyyy-mm-dd", "dd MMM yyyy")


def to_datetime(value: DateLike) -> datetime | None:
    """Coerce a date-like value to ``datetime``; ``None`` if not convertible."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError, ValueError):
            logger.debug("timestamp_out_of_range", value=value)
            return None
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            logger.debug("unparseable_date", value=value)
            return None
    return None


def is_valid_date(value: DateLike) -> bool:
    return to_datetime(value) is not None


def _now_like(reference: datetime) -> datetime:
    """Current time in the same timezone awareness as ``reference``."""
    if reference.tzinfo is not None:
        return datetime.now(reference.tzinfo)
    return datetime.now()


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def format_date(value: DateLike, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Format a date in one of ``DATE_FORMATS``; unknown layouts use dd/mm/yyyy."""
    d = to_datetime(value)
    if d is None:
        return ""

    day = f"{d.day:02d}"
    month = f"{d.month:02d}"
    year = f"{d.year:04d}"

    if fmt == "mm/dd/yyyy":
        return f"{month}/{day}/{year}"
    if fmt == "yyyy-mm-dd":
        return f"{year}-{month}-{day}"
    if fmt == "dd MMM yyyy":
        return f"{day} {MONTH_ABBREVIATIONS[d.month - 1]} {year}"
    return f"{day}/{month}/{year}"


def format_date_time(value: DateLike) -> str:
    """``dd/mm/yyyy HH:MM`` on a 24-hour clock."""
    d = to_datetime(value)
    if d is None:
        return ""
    return f"{format_date(d)} {d.hour:02d}:{d.minute:02d}"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''} ago"


def relative_time(value: DateLike, now: datetime | None = None) -> str:
    """Human label for elapsed time, e.g. ``"3 hours ago"``.

    Anything older than a week is shown as ``dd MMM yyyy``.
    """
    d = to_datetime(value)
    if d is None:
        return ""
    if now is None:
        now = _now_like(d)
    elif (now.tzinfo is None) != (d.tzinfo is None):
        now = now.replace(tzinfo=d.tzinfo)

    seconds = math.floor((now - d).total_seconds())
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if seconds < 60:
        return "Just now"
    if minutes < 60:
        return _plural(minutes, "minute")
    if hours < 24:
        return _plural(hours, "hour")
    if days < 7:
        return _plural(days, "day")
    return format_date(d, "dd MMM yyyy")


def age(birth_date: DateLike, today: date | None = None) -> int:
    """Whole years since ``birth_date``; 0 when the date is missing."""
    birth = to_datetime(birth_date)
    if birth is None:
        return 0
    if today is None:
        today = _as_date(_now_like(birth))
    today = _as_date(today)

    years = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        years -= 1
    return years


def is_valid_age(
    birth_date: DateLike,
    min_age: int = 18,
    max_age: int = 100,
    today: date | None = None,
) -> bool:
    if not is_valid_date(birth_date):
        return False
    return min_age <= age(birth_date, today=today) <= max_age


def is_date_in_range(value: DateLike, start: DateLike, end: DateLike) -> bool:
    """Inclusive on both bounds, compared by calendar day."""
    d, lo, hi = to_datetime(value), to_datetime(start), to_datetime(end)
    if d is None or lo is None or hi is None:
        return False
    return _as_date(lo) <= _as_date(d) <= _as_date(hi)


def _coerce(value: DateLike) -> date | datetime | None:
    if isinstance(value, (date, datetime)):
        return value
    return to_datetime(value)


def add_days(value: DateLike, days: int) -> date | datetime | None:
    """A new value ``days`` later (earlier when negative), same type as given."""
    d = _coerce(value)
    if d is None:
        return None
    try:
        return d + timedelta(days=days)
    except OverflowError:
        logger.debug("add_days_out_of_range", value=str(value), days=days)
        return None


def add_months(value: DateLike, months: int) -> date | datetime | None:
    """A new value ``months`` later, clamped to the end of the target month.

    Jan 31 plus one month is Feb 28 (29 in leap years).
    """
    d = _coerce(value)
    if d is None:
        return None

    index = d.month - 1 + months
    year = d.year + index // 12
    month = index % 12 + 1
    if not date.min.year <= year <= date.max.year:
        logger.debug("add_months_out_of_range", value=str(value), months=months)
        return None
    day = min(d.day, calendar.monthrange(year, month)[1])
    return d.replace(year=year, month=month, day=day)


def financial_year(value: DateLike = None, today: date | None = None) -> str:
    """Financial year label ``"YYYY-YYYY"`` for a year starting in April.

    >>> financial_year(date(2024, 3, 31))
    '2023-2024'
    """
    if value is None:
        d: date | datetime | None = today or date.today()
    else:
        d = to_datetime(value)
    if d is None:
        return ""

    start = d.year if d.month >= FINANCIAL_YEAR_START_MONTH else d.year - 1
    return f"{start}-{start + 1}"


def format_date_for_input(value: DateLike) -> str:
    """``yyyy-mm-dd`` for date-entry controls."""
    return format_date(value, "yyyy-mm-dd")
