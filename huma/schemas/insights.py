from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Union

from huma.services.mood import DayLabel

class OutModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

class WeeklyStatsOut(OutModel):
    excellent_days: int = Field(serialization_alias="excellentDays")
    correct_days: int = Field(serialization_alias="correctDays")
    difficult_days: int = Field(serialization_alias="difficultDays")
    missing_days: int = Field(serialization_alias="missingDays")

class DailyEntryOut(OutModel):
    date: str
    mood_value: Optional[Union[int, float]] = Field(default=None, serialization_alias="moodValue")
    label: DayLabel

class MonthlyEntryOut(OutModel):
    month: str
    average_mood: Optional[float] = Field(default=None, serialization_alias="averageMood")
    participation: int

class PeriodSummaryOut(OutModel):
    week_start: str = Field(serialization_alias="weekStart")
    week_end: str = Field(serialization_alias="weekEnd")
    period: str
    participation: int
    average_mood: Optional[float] = Field(default=None, serialization_alias="averageMood")
    daily: list[Union[DailyEntryOut, MonthlyEntryOut]]
    stats: WeeklyStatsOut

class MoodBucketOut(OutModel):
    label: str
    range: tuple[int, int]
    count: int
    percent: int

class HistogramOut(OutModel):
    total_checkins: int = Field(serialization_alias="totalCheckins")
    buckets: list[MoodBucketOut]

class PeriodFactorsOut(OutModel):
    week_start: str = Field(serialization_alias="weekStart")
    week_end: str = Field(serialization_alias="weekEnd")
    period: str
    available_causes: list[str] = Field(serialization_alias="availableCauses")
    summary: HistogramOut
    by_cause: dict[str, HistogramOut] = Field(serialization_alias="byCause")

class HistoryEntryOut(OutModel):
    date: str
    status: str  # completed | missed
    mood_value: Optional[Union[int, float]] = Field(default=None, serialization_alias="moodValue")

class TrendPointOut(OutModel):
    day: str
    value: float

class TeamSnapshotOut(OutModel):
    global_score: float = Field(serialization_alias="globalScore")
    mood_label: str = Field(serialization_alias="moodLabel")
    distribution: dict[str, int]
    weekly_trend: list[TrendPointOut] = Field(serialization_alias="weeklyTrend")
