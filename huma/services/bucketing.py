"""
Day-by-day walks over a resolved period.

Every builder takes a sparse `mood_by_date` mapping (ISO date string -> mood)
and a WeeklyStats accumulator that is updated once per calendar day walked.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Mapping, Optional, Union

from huma.core.errors import PeriodValidationError
from huma.services.mood import DayLabel, MoodValue, WeeklyStats, classify_mood
from huma.services.periods import WORKING_DAYS, Period, PeriodRange, coerce_period
from huma.utils.rounding import round_half_up
from huma.utils.time import iter_days, to_date_only

MoodByDate = Mapping[str, MoodValue]

HISTORY_MIN_DAYS = 1
HISTORY_MAX_DAYS = 365


@dataclass(slots=True)
class DailyEntry:
    date: str
    mood_value: Optional[MoodValue]
    label: DayLabel


@dataclass(slots=True)
class MonthlyEntry:
    month: str
    average_mood: Optional[float]
    participation: int


@dataclass(slots=True)
class HistoryEntry:
    date: str
    status: str  # completed | missed
    mood_value: Optional[MoodValue]


@dataclass(slots=True)
class _MonthAccumulator:
    total: float = 0
    count: int = 0
    participation: int = 0


def _daily_entry(day: date, mood_by_date: MoodByDate, stats: WeeklyStats) -> DailyEntry:
    date_str = to_date_only(day)
    mood_value = mood_by_date.get(date_str)
    label = classify_mood(mood_value)
    stats.record(label)
    return DailyEntry(date=date_str, mood_value=mood_value, label=label)


def build_daily_for_week(start: date, mood_by_date: MoodByDate, stats: WeeklyStats) -> tuple[list[DailyEntry], int]:
    daily = [_daily_entry(start + timedelta(days=i), mood_by_date, stats) for i in range(WORKING_DAYS)]
    participation = sum(1 for entry in daily if entry.mood_value is not None)
    return daily, participation


def build_daily_for_month(
    start: date, end: date, mood_by_date: MoodByDate, stats: WeeklyStats
) -> tuple[list[DailyEntry], int]:
    daily = [_daily_entry(day, mood_by_date, stats) for day in iter_days(start, end)]
    participation = sum(1 for entry in daily if entry.mood_value is not None)
    return daily, participation


def build_daily_for_year(
    start: date, end: date, mood_by_date: MoodByDate, stats: WeeklyStats
) -> tuple[list[MonthlyEntry], int]:
    """
    Walk the whole year day by day but report one entry per month.
    Monthly averages are shown on the 1-10 scale.
    """
    months: dict[str, _MonthAccumulator] = {}
    participation = 0

    for day in iter_days(start, end):
        date_str = to_date_only(day)
        mood_value = mood_by_date.get(date_str)
        bucket = months.setdefault(date_str[:7], _MonthAccumulator())

        if mood_value is not None:
            participation += 1
            bucket.total += mood_value
            bucket.count += 1
            bucket.participation += 1

        stats.record(classify_mood(mood_value))

    daily = [
        MonthlyEntry(
            month=month,
            average_mood=round_half_up(acc.total / acc.count / 10, 1) if acc.count else None,
            participation=acc.participation,
        )
        for month, acc in sorted(months.items())
    ]
    return daily, participation


def build_daily(
    period: Period | str, period_range: PeriodRange, mood_by_date: MoodByDate
) -> tuple[list[DailyEntry] | list[MonthlyEntry], int, WeeklyStats]:
    """
    Dispatch to the builder matching `period`; returns (daily, participation, stats).
    """
    stats = WeeklyStats()
    p = coerce_period(period)
    if p is Period.YEAR:
        daily, participation = build_daily_for_year(period_range.start, period_range.end, mood_by_date, stats)
    elif p is Period.MONTH:
        daily, participation = build_daily_for_month(period_range.start, period_range.end, mood_by_date, stats)
    else:
        daily, participation = build_daily_for_week(period_range.start, mood_by_date, stats)
    return daily, participation, stats


def validate_history_days(days: Union[int, str]) -> int:
    try:
        window = int(days)
    except (TypeError, ValueError):
        raise PeriodValidationError("days must be an integer") from None
    if not HISTORY_MIN_DAYS <= window <= HISTORY_MAX_DAYS:
        raise PeriodValidationError(f"days must be between {HISTORY_MIN_DAYS} and {HISTORY_MAX_DAYS}")
    return window


def build_history(
    mood_by_date: MoodByDate, *, today: date, days: Union[int, str] = 30
) -> list[HistoryEntry]:
    """
    Rolling check-in history, most recent day first.
    """
    window = validate_history_days(days)
    history: list[HistoryEntry] = []
    for offset in range(window):
        date_str = to_date_only(today - timedelta(days=offset))
        mood_value = mood_by_date.get(date_str)
        if mood_value is not None:
            history.append(HistoryEntry(date=date_str, status="completed", mood_value=mood_value))
        else:
            history.append(HistoryEntry(date=date_str, status="missed", mood_value=None))
    return history
