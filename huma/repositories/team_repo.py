from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from huma.db.models import TeamMember
from uuid import UUID

async def get_member_ids(db: AsyncSession, team_id: UUID) -> list[UUID]:
    res = await db.execute(select(TeamMember.user_id).where(TeamMember.team_id == team_id))
    return list(res.scalars())

async def get_first_team_id(db: AsyncSession, user_id: UUID) -> UUID | None:
    res = await db.execute(
        select(TeamMember.team_id).where(TeamMember.user_id == user_id).order_by(TeamMember.joined_at.asc()).limit(1)
    )
    return res.scalar_one_or_none()

async def is_member(db: AsyncSession, team_id: UUID, user_id: UUID) -> bool:
    res = await db.execute(
        select(TeamMember.id).where(TeamMember.team_id == team_id, TeamMember.user_id == user_id).limit(1)
    )
    return res.scalar_one_or_none() is not None
