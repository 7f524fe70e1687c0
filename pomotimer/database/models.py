"""SQLAlchemy ORM models for PomoTimer's interval history."""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IntervalRecord(Base):
    """One finished mode (work or break) of a Pomodoro session."""

    __tablename__ = "intervals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    mode = Column(String(20), nullable=False)  # work | short_break | long_break
    started_at = Column(DateTime(timezone=True), nullable=False)
    ended_at = Column(DateTime(timezone=True), nullable=False)
    duration_seconds = Column(Integer, nullable=False, default=0)
    work_sessions_completed = Column(Integer, nullable=False, default=0)
    recorded_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    def __repr__(self) -> str:
        return (
            f"<IntervalRecord id={self.id} mode={self.mode} "
            f"duration={self.duration_seconds}s>"
        )
