from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Union

from huma.utils.rounding import percent

MoodValue = Union[int, float]

EXCELLENT_THRESHOLD = 70
CORRECT_THRESHOLD = 40


class DayLabel(str, Enum):
    EXCELLENT = "Jour excellent"
    CORRECT = "Jour correct"
    DIFFICULT = "Jour difficile"
    MISSING = "Aucun check-in"


@dataclass(slots=True)
class WeeklyStats:
    excellent_days: int = 0
    correct_days: int = 0
    difficult_days: int = 0
    missing_days: int = 0

    def record(self, label: DayLabel) -> None:
        if label is DayLabel.EXCELLENT:
            self.excellent_days += 1
        elif label is DayLabel.CORRECT:
            self.correct_days += 1
        elif label is DayLabel.DIFFICULT:
            self.difficult_days += 1
        else:
            self.missing_days += 1

    @property
    def total_days(self) -> int:
        return self.excellent_days + self.correct_days + self.difficult_days + self.missing_days


def classify_mood(mood_value: Optional[MoodValue]) -> DayLabel:
    """
    Label a day from its raw 1-100 mood:
    - None     -> missing
    - >= 70    -> excellent
    - 40..69   -> correct
    - < 40     -> difficult
    """
    if mood_value is None:
        return DayLabel.MISSING
    if mood_value >= EXCELLENT_THRESHOLD:
        return DayLabel.EXCELLENT
    if mood_value >= CORRECT_THRESHOLD:
        return DayLabel.CORRECT
    return DayLabel.DIFFICULT


# (label, min, max), both bounds inclusive
MOOD_BUCKETS: tuple[tuple[str, int, int], ...] = (
    ("Éprouvé", 0, 20),
    ("Sous tension", 21, 40),
    ("Mitigé", 41, 60),
    ("Serein", 61, 80),
    ("Épanoui", 81, 100),
)


@dataclass(slots=True)
class MoodBucket:
    label: str
    range: tuple[int, int]
    count: int = 0
    percent: int = 0

    def contains(self, value: MoodValue) -> bool:
        return self.range[0] <= value <= self.range[1]


@dataclass(slots=True)
class Histogram:
    total_checkins: int
    buckets: list[MoodBucket] = field(default_factory=list)


def build_bucket_summary(values: Iterable[MoodValue]) -> Histogram:
    """
    Spread mood values over the five fixed buckets.

    A value lands in the first bucket whose range contains it. Values outside
    0-100 (or between two integer bounds, e.g. 20.5) match no bucket: they are
    still part of `total_checkins` so bucket percents may not add up to 100.
    """
    moods = list(values)
    buckets = [MoodBucket(label=label, range=(lo, hi)) for label, lo, hi in MOOD_BUCKETS]

    for value in moods:
        bucket = next((b for b in buckets if b.contains(value)), None)
        if bucket is not None:
            bucket.count += 1

    total = len(moods)
    for bucket in buckets:
        bucket.percent = percent(bucket.count, total)

    return Histogram(total_checkins=total, buckets=buckets)
