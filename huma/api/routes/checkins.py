from fastapi import APIRouter, Depends, Query
from huma.api.deps import Authed
from huma.core.config import settings
from huma.schemas.insights import HistoryEntryOut, PeriodFactorsOut, PeriodSummaryOut
from huma.services import subjects
from huma.services.periods import Period
from huma.utils.time import today_utc
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/checkins", tags=["checkins"])

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

@router.get("/summary", response_model=PeriodSummaryOut)
async def summary(
    period: Period = Period.WEEK,
    week_start: str | None = Query(default=None, alias="weekStart", pattern=DATE_PATTERN),
    date: str | None = None,
    ctx=Depends(Authed),
):
    logger.info("Mood summary for user %s (period=%s)", ctx["user_id"], period.value)
    return await subjects.user_period_summary(
        ctx["db"], ctx["user_id"], today=today_utc(), period=period, week_start=week_start, date_value=date
    )

@router.get("/factors", response_model=PeriodFactorsOut)
async def factors(
    period: Period = Period.WEEK,
    week_start: str | None = Query(default=None, alias="weekStart", pattern=DATE_PATTERN),
    date: str | None = None,
    ctx=Depends(Authed),
):
    logger.info("Mood factors for user %s (period=%s)", ctx["user_id"], period.value)
    return await subjects.user_period_factors(
        ctx["db"], ctx["user_id"], today=today_utc(), period=period, week_start=week_start, date_value=date
    )

@router.get("/history", response_model=list[HistoryEntryOut])
async def history(days: int = settings.HISTORY_DEFAULT_DAYS, ctx=Depends(Authed)):
    return await subjects.user_history(ctx["db"], ctx["user_id"], today=today_utc(), days=days)
