from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Optional, Sequence, Union

from huma.services.bucketing import DailyEntry, MonthlyEntry, build_daily
from huma.services.causes import filter_known_causes, parse_causes
from huma.services.mood import Histogram, MoodValue, WeeklyStats, build_bucket_summary
from huma.services.periods import Period, PeriodRange, coerce_period
from huma.utils.rounding import percent, round_half_up
from huma.utils.time import to_date_only

logger = logging.getLogger(__name__)

TREND_DAY_LETTERS = ("D", "L", "M", "M", "J", "V", "S")  # Sunday first
TOP_CAUSES = 3

NO_DATA_LABEL = "Aucune donnée disponible"
NO_TEAM_LABEL = "Vous n'appartenez à aucune équipe"


@dataclass(slots=True, frozen=True)
class CheckinRow:
    """One row handed over by the repositories."""

    date: Union[date, str]
    mood_value: Optional[MoodValue] = None
    causes: Any = None

    @property
    def date_key(self) -> str:
        return self.date if isinstance(self.date, str) else to_date_only(self.date)


@dataclass(slots=True)
class PeriodSummary:
    # named week_* for every period, clients already read weekStart/weekEnd
    week_start: str
    week_end: str
    period: str
    participation: int
    average_mood: Optional[float]
    daily: list[Union[DailyEntry, MonthlyEntry]]
    stats: WeeklyStats


@dataclass(slots=True)
class PeriodFactors:
    week_start: str
    week_end: str
    period: str
    available_causes: list[str]
    summary: Histogram
    by_cause: dict[str, Histogram] = field(default_factory=dict)


@dataclass(slots=True)
class TrendPoint:
    day: str
    value: float


@dataclass(slots=True)
class TeamSnapshot:
    global_score: float
    mood_label: str
    distribution: dict[str, int] = field(default_factory=dict)
    weekly_trend: list[TrendPoint] = field(default_factory=list)


def _average_on_ten(values: Iterable[Optional[MoodValue]]) -> Optional[float]:
    moods = [v for v in values if v is not None]
    if not moods:
        return None
    return round_half_up(sum(moods) / len(moods) / 10, 1)


def build_mood_by_date(rows: Iterable[CheckinRow], precision: Optional[int] = None) -> dict[str, MoodValue]:
    """
    Sparse date -> mood map; a later row for the same date replaces the earlier one.
    """
    mood_by_date: dict[str, MoodValue] = {}
    for row in rows:
        if row.mood_value is None:
            continue
        value = row.mood_value if precision is None else round_half_up(row.mood_value, precision)
        mood_by_date[row.date_key] = value
    return mood_by_date


def get_period_summary(
    rows: Sequence[CheckinRow],
    period: Period | str,
    period_range: PeriodRange,
    *,
    average_rows: Optional[Sequence[CheckinRow]] = None,
    precision: Optional[int] = None,
) -> PeriodSummary:
    """
    Mood summary for a period.

    `rows` carry one mood per day and feed the daily series. For a team those
    are per-day averages, so the overall average is taken from the individual
    check-ins passed as `average_rows` instead.
    """
    p = coerce_period(period)
    mood_by_date = build_mood_by_date(rows, precision)
    source = rows if average_rows is None else average_rows
    average_mood = _average_on_ten(row.mood_value for row in source)

    daily, participation, stats = build_daily(p, period_range, mood_by_date)

    return PeriodSummary(
        week_start=to_date_only(period_range.start),
        week_end=to_date_only(period_range.end),
        period=p.value,
        participation=participation,
        average_mood=average_mood,
        daily=daily,
        stats=stats,
    )


def get_period_factors(
    rows: Sequence[CheckinRow], period: Period | str, period_range: PeriodRange
) -> PeriodFactors:
    """
    Mood histogram overall and per check-in cause.
    `available_causes` keeps the order in which causes were first seen.
    """
    p = coerce_period(period)
    summary_values: list[MoodValue] = []
    values_by_cause: dict[str, list[MoodValue]] = {}

    for row in rows:
        if row.mood_value is not None:
            summary_values.append(row.mood_value)
        for cause in filter_known_causes(parse_causes(row.causes)):
            cause_values = values_by_cause.setdefault(cause, [])
            if row.mood_value is not None:
                cause_values.append(row.mood_value)

    return PeriodFactors(
        week_start=to_date_only(period_range.start),
        week_end=to_date_only(period_range.end),
        period=p.value,
        available_causes=list(values_by_cause),
        summary=build_bucket_summary(summary_values),
        by_cause={cause: build_bucket_summary(values) for cause, values in values_by_cause.items()},
    )


def team_mood_label(score: float) -> str:
    if score >= 8:
        return "L'équipe est au top !"
    if score >= 6:
        return "Tout va bien aujourd'hui"
    if score >= 4:
        return "Ambiance mitigée"
    return "Journée difficile pour l'équipe"


def empty_team_snapshot(label: str = NO_DATA_LABEL) -> TeamSnapshot:
    return TeamSnapshot(global_score=0, mood_label=label)


def get_team_snapshot(today_rows: Sequence[CheckinRow], trend_rows: Sequence[CheckinRow]) -> TeamSnapshot:
    """
    Today's team mood on the 1-10 scale, its top causes and the recent daily trend.
    - `today_rows`: every check-in of the team for today
    - `trend_rows`: one averaged row per recent day
    """
    today_moods = [row.mood_value for row in today_rows if row.mood_value is not None]
    global_score = _average_on_ten(today_moods) or 0
    total_checkins = len(today_moods)

    cause_counts: Counter[str] = Counter()
    for row in today_rows:
        cause_counts.update(filter_known_causes(parse_causes(row.causes)))

    # most_common keeps first-seen order between equal counts
    distribution = {
        cause: percent(count, total_checkins) for cause, count in cause_counts.most_common(TOP_CAUSES)
    }

    weekly_trend = []
    for row in trend_rows:
        if row.mood_value is None:
            continue
        day = row.date if isinstance(row.date, date) else date.fromisoformat(row.date_key)
        # date.weekday() is Monday=0; the letters start on Sunday
        weekly_trend.append(
            TrendPoint(day=TREND_DAY_LETTERS[(day.weekday() + 1) % 7], value=round_half_up(row.mood_value / 10, 1))
        )

    logger.debug("Team snapshot over %s check-ins, %s trend points", total_checkins, len(weekly_trend))
    return TeamSnapshot(
        global_score=global_score,
        mood_label=team_mood_label(global_score),
        distribution=distribution,
        weekly_trend=weekly_trend,
    )
