"""
Resolve "me" or "my team" into row sets and hand them to the insight engine.

These are the only async pieces around the engine: they validate the period
anchor first, query the repositories, then call the pure aggregation functions.
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional, Union
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from huma.core.errors import AppError
from huma.repositories import checkin_repo, team_repo
from huma.services.bucketing import HistoryEntry, build_history, validate_history_days
from huma.services.insights import (
    NO_TEAM_LABEL,
    PeriodFactors,
    PeriodSummary,
    TeamSnapshot,
    build_mood_by_date,
    empty_team_snapshot,
    get_period_factors,
    get_period_summary,
    get_team_snapshot,
)
from huma.services.periods import Period, coerce_period, resolve_period_range, validate_period_date

logger = logging.getLogger(__name__)

TREND_DAYS = 7
TEAM_MOOD_PRECISION = 1


async def user_period_summary(
    db: AsyncSession,
    user_id: UUID,
    *,
    today: date,
    period: Union[Period, str, None] = None,
    week_start: Optional[str] = None,
    date_value: Optional[str] = None,
) -> PeriodSummary:
    p = coerce_period(period)
    validate_period_date(p, date_value)
    period_range = resolve_period_range(p, week_start, date_value, today=today)
    rows = await checkin_repo.fetch_mood_series(db, [user_id], period_range.start, period_range.end)
    return get_period_summary(rows, p, period_range)


async def user_period_factors(
    db: AsyncSession,
    user_id: UUID,
    *,
    today: date,
    period: Union[Period, str, None] = None,
    week_start: Optional[str] = None,
    date_value: Optional[str] = None,
) -> PeriodFactors:
    p = coerce_period(period)
    validate_period_date(p, date_value)
    period_range = resolve_period_range(p, week_start, date_value, today=today)
    rows = await checkin_repo.fetch_mood_and_cause_series(db, [user_id], period_range.start, period_range.end)
    return get_period_factors(rows, p, period_range)


async def user_history(db: AsyncSession, user_id: UUID, *, today: date, days: int = 30) -> list[HistoryEntry]:
    window = validate_history_days(days)
    start = today - timedelta(days=window - 1)
    rows = await checkin_repo.fetch_mood_series(db, [user_id], start, today)
    return build_history(build_mood_by_date(rows), today=today, days=window)


async def resolve_team_members(db: AsyncSession, user_id: UUID, team_id: Optional[UUID]) -> Optional[list[UUID]]:
    """
    Members of the requested team, or of the caller's first team.
    Returns None when the caller belongs to no team.
    """
    if team_id is not None:
        if not await team_repo.is_member(db, team_id, user_id):
            raise AppError("Vous n'appartenez pas à cette équipe", status_code=403, error_code="FORBIDDEN")
    else:
        team_id = await team_repo.get_first_team_id(db, user_id)
        if team_id is None:
            logger.info("User %s has no team", user_id)
            return None
    return await team_repo.get_member_ids(db, team_id)


async def team_period_summary(
    db: AsyncSession,
    user_id: UUID,
    *,
    today: date,
    team_id: Optional[UUID] = None,
    period: Union[Period, str, None] = None,
    week_start: Optional[str] = None,
    date_value: Optional[str] = None,
) -> PeriodSummary:
    p = coerce_period(period)
    validate_period_date(p, date_value)
    period_range = resolve_period_range(p, week_start, date_value, today=today)

    member_ids = await resolve_team_members(db, user_id, team_id)
    if not member_ids:
        return get_period_summary([], p, period_range)

    daily_rows = await checkin_repo.fetch_mood_series(db, member_ids, period_range.start, period_range.end)
    checkin_rows = await checkin_repo.fetch_mood_and_cause_series(db, member_ids, period_range.start, period_range.end)
    return get_period_summary(daily_rows, p, period_range, average_rows=checkin_rows, precision=TEAM_MOOD_PRECISION)


async def team_period_factors(
    db: AsyncSession,
    user_id: UUID,
    *,
    today: date,
    team_id: Optional[UUID] = None,
    period: Union[Period, str, None] = None,
    week_start: Optional[str] = None,
    date_value: Optional[str] = None,
) -> PeriodFactors:
    p = coerce_period(period)
    validate_period_date(p, date_value)
    period_range = resolve_period_range(p, week_start, date_value, today=today)

    member_ids = await resolve_team_members(db, user_id, team_id)
    if not member_ids:
        return get_period_factors([], p, period_range)

    rows = await checkin_repo.fetch_mood_and_cause_series(db, member_ids, period_range.start, period_range.end)
    return get_period_factors(rows, p, period_range)


async def team_snapshot(
    db: AsyncSession, user_id: UUID, *, today: date, team_id: Optional[UUID] = None
) -> TeamSnapshot:
    member_ids = await resolve_team_members(db, user_id, team_id)
    if member_ids is None:
        return empty_team_snapshot(NO_TEAM_LABEL)
    if not member_ids:
        return empty_team_snapshot()

    today_rows = await checkin_repo.fetch_mood_and_cause_series(db, member_ids, today, today)
    trend_rows = await checkin_repo.fetch_mood_series(db, member_ids, today - timedelta(days=TREND_DAYS), today)
    return get_team_snapshot(today_rows, trend_rows)
