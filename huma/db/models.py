from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy import text, ForeignKey, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
import uuid
from datetime import datetime
from typing import Optional, List

# Only the columns the insight queries read; the tables are owned by the CRUD service.

class Base(DeclarativeBase):
    __table_args__ = {"schema": "app"}

class Team(Base):
    __tablename__ = "teams"
    __table_args__ = {"schema": "app"}
    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    members: Mapped[List["TeamMember"]] = relationship(back_populates="team", cascade="all, delete")

class TeamMember(Base):
    __tablename__ = "team_members"
    __table_args__ = {"schema": "app"}
    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    team_id: Mapped[uuid.UUID] = mapped_column(ForeignKey("app.teams.id", ondelete="CASCADE"))
    team: Mapped["Team"] = relationship(back_populates="members")
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    joined_at: Mapped[datetime] = mapped_column(server_default=text("now()"))

class CheckIn(Base):
    __tablename__ = "check_ins"
    __table_args__ = {"schema": "app"}
    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    mood_value: Mapped[int] = mapped_column(Integer, nullable=False)
    causes: Mapped[Optional[str]] = mapped_column(Text)  # JSON array of cause tags
    timestamp: Mapped[datetime]
