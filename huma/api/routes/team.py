from fastapi import APIRouter, Depends, Query
from uuid import UUID
from huma.api.deps import Authed
from huma.api.routes.checkins import DATE_PATTERN
from huma.schemas.insights import PeriodFactorsOut, PeriodSummaryOut, TeamSnapshotOut
from huma.services import subjects
from huma.services.periods import Period
from huma.utils.time import today_utc
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/team", tags=["team"])

@router.get("/stats", response_model=TeamSnapshotOut)
async def stats(team_id: UUID | None = Query(default=None, alias="teamId"), ctx=Depends(Authed)):
    return await subjects.team_snapshot(ctx["db"], ctx["user_id"], today=today_utc(), team_id=team_id)

@router.get("/summary", response_model=PeriodSummaryOut)
async def summary(
    team_id: UUID | None = Query(default=None, alias="teamId"),
    period: Period = Period.WEEK,
    week_start: str | None = Query(default=None, alias="weekStart", pattern=DATE_PATTERN),
    date: str | None = None,
    ctx=Depends(Authed),
):
    logger.info("Team mood summary for user %s (team=%s, period=%s)", ctx["user_id"], team_id, period.value)
    return await subjects.team_period_summary(
        ctx["db"], ctx["user_id"], today=today_utc(), team_id=team_id,
        period=period, week_start=week_start, date_value=date,
    )

@router.get("/factors", response_model=PeriodFactorsOut)
async def factors(
    team_id: UUID | None = Query(default=None, alias="teamId"),
    period: Period = Period.WEEK,
    week_start: str | None = Query(default=None, alias="weekStart", pattern=DATE_PATTERN),
    date: str | None = None,
    ctx=Depends(Authed),
):
    logger.info("Team mood factors for user %s (team=%s, period=%s)", ctx["user_id"], team_id, period.value)
    return await subjects.team_period_factors(
        ctx["db"], ctx["user_id"], today=today_utc(), team_id=team_id,
        period=period, week_start=week_start, date_value=date,
    )
