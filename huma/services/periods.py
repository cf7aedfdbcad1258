from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Optional

from huma.core.errors import PeriodValidationError
from huma.utils.time import (
    month_bounds,
    parse_date_only,
    parse_month_only,
    parse_year_only,
    week_monday,
    year_bounds,
)

# Working week only: Monday through Friday
WORKING_DAYS = 5


class Period(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


_ANCHOR_FORMATS = {
    Period.WEEK: ("YYYY-MM-DD", parse_date_only),
    Period.MONTH: ("YYYY-MM", parse_month_only),
    Period.YEAR: ("YYYY", parse_year_only),
}


@dataclass(slots=True, frozen=True)
class PeriodRange:
    start: date
    end: date


def coerce_period(period: Period | str | None) -> Period:
    """
    Accept a Period or its string value; None means the default weekly view.
    """
    if period is None:
        return Period.WEEK
    try:
        return Period(period)
    except ValueError:
        raise PeriodValidationError("period must be one of week, month, year") from None


def validate_period_date(period: Period | str | None, date_value: Optional[str]) -> None:
    """
    Stricter gate than resolution: a `date` that does not match the period's
    format is rejected instead of silently replaced by today.
    """
    p = coerce_period(period)
    if not date_value:
        return
    fmt, parser = _ANCHOR_FORMATS[p]
    if parser(date_value) is None:
        raise PeriodValidationError(f"date must be in {fmt} format for period={p.value}")


def resolve_period_range(
    period: Period | str | None,
    week_start: Optional[str] = None,
    date_value: Optional[str] = None,
    *,
    today: date,
) -> PeriodRange:
    """
    Turn a period and its anchor into an inclusive date range.
    - week:  Monday..Friday of the anchor's week (`week_start` wins over `date`)
    - month: first..last day of the anchor month
    - year:  Jan 1..Dec 31 of the anchor year
    Anchors that do not parse fall back to `today`.
    """
    p = coerce_period(period)

    if p is Period.MONTH:
        start, end = month_bounds(parse_month_only(date_value) or today)
        return PeriodRange(start, end)

    if p is Period.YEAR:
        start, end = year_bounds(parse_year_only(date_value) or today)
        return PeriodRange(start, end)

    anchor = parse_date_only(week_start) or parse_date_only(date_value) or today
    monday = week_monday(anchor)
    return PeriodRange(monday, monday + timedelta(days=WORKING_DAYS - 1))
