from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from huma.db.models import CheckIn
from huma.services.insights import CheckinRow
from datetime import date
from typing import Sequence
from uuid import UUID


def _checkin_day():
    return func.date(CheckIn.timestamp)


def _to_mood(value):
    # AVG() comes back as Decimal
    return None if value is None else (value if isinstance(value, int) else float(value))


async def fetch_mood_series(db: AsyncSession, user_ids: Sequence[UUID], start: date, end: date) -> list[CheckinRow]:
    """
    One row per calendar day with a check-in between start and end (inclusive).
    For a single user this is the day's mood; for several users the day's average.
    """
    if not user_ids:
        return []
    day = _checkin_day()
    if len(user_ids) == 1:
        stmt = (
            select(day.label("day"), CheckIn.mood_value.label("mood"))
            .where(CheckIn.user_id == user_ids[0], day.between(start, end))
            .order_by(day.asc())
        )
    else:
        stmt = (
            select(day.label("day"), func.avg(CheckIn.mood_value).label("mood"))
            .where(CheckIn.user_id.in_(user_ids), day.between(start, end))
            .group_by(day)
            .order_by(day.asc())
        )
    res = await db.execute(stmt)
    return [CheckinRow(date=r.day, mood_value=_to_mood(r.mood)) for r in res]


async def fetch_mood_and_cause_series(db: AsyncSession, user_ids: Sequence[UUID], start: date, end: date) -> list[CheckinRow]:
    """
    Every individual check-in between start and end with its raw causes.
    Several team members on the same day give several rows.
    """
    if not user_ids:
        return []
    day = _checkin_day()
    stmt = (
        select(day.label("day"), CheckIn.mood_value, CheckIn.causes)
        .where(CheckIn.user_id.in_(user_ids), day.between(start, end))
        .order_by(CheckIn.timestamp.asc())
    )
    res = await db.execute(stmt)
    return [CheckinRow(date=r.day, mood_value=_to_mood(r.mood_value), causes=r.causes) for r in res]
