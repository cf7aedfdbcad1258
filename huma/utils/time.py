from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Optional


UTC = timezone.utc

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_ONLY = re.compile(r"^\d{4}-\d{2}$")
_YEAR_ONLY = re.compile(r"^\d{4}$")


def utcnow() -> datetime:
    """
    Returns timezone-aware current UTC time.
    """
    return datetime.now(UTC)


def today_utc() -> date:
    """
    Current calendar date on the UTC clock.
    """
    return utcnow().date()


def parse_date_only(value: Optional[str]) -> Optional[date]:
    """
    Parse a strict `YYYY-MM-DD` string. Returns None for anything else,
    including impossible dates like 2026-02-30.
    """
    if not value or not isinstance(value, str) or not _DATE_ONLY.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_month_only(value: Optional[str]) -> Optional[date]:
    """
    Parse a strict `YYYY-MM` string into the first day of that month.
    """
    if not value or not isinstance(value, str) or not _MONTH_ONLY.match(value):
        return None
    try:
        return date(int(value[:4]), int(value[5:7]), 1)
    except ValueError:
        return None


def parse_year_only(value: Optional[str]) -> Optional[date]:
    """
    Parse a strict `YYYY` string into January 1st of that year.
    """
    if not value or not isinstance(value, str) or not _YEAR_ONLY.match(value):
        return None
    try:
        return date(int(value), 1, 1)
    except ValueError:
        return None


def to_date_only(d: date) -> str:
    return d.isoformat()


def week_monday(d: date) -> date:
    """
    Monday of the week containing `d`. Sunday belongs to the week that
    started six days earlier.
    """
    return d - timedelta(days=d.weekday())


def month_bounds(d: date) -> tuple[date, date]:
    last_day = calendar.monthrange(d.year, d.month)[1]
    return date(d.year, d.month, 1), date(d.year, d.month, last_day)


def year_bounds(d: date) -> tuple[date, date]:
    return date(d.year, 1, 1), date(d.year, 12, 31)


def iter_days(start: date, end: date) -> Iterator[date]:
    """
    Yield every calendar day from start to end, both inclusive.
    """
    cursor = start
    while cursor <= end:
        yield cursor
        cursor += timedelta(days=1)
