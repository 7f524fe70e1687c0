"""Interval history: one row per finished work or break interval."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from ..errors import StorageError
from .db import get_session
from .models import IntervalRecord


logger = logging.getLogger(__name__)


class HistoryRecorder:
    """Writes finished intervals to the history database.

    ``record_interval`` is best-effort: a database failure is logged and
    swallowed so that a broken history file never blocks the timer.
    """

    def record_interval(
        self,
        mode: str,
        started_at: datetime,
        ended_at: datetime,
        work_sessions_completed: int,
    ) -> None:
        # SQLite keeps wall-clock fields only; store everything as UTC
        started_at = as_utc(started_at).astimezone(timezone.utc)
        ended_at = as_utc(ended_at).astimezone(timezone.utc)
        try:
            with get_session() as db:
                db.add(IntervalRecord(
                    mode=mode,
                    started_at=started_at,
                    ended_at=ended_at,
                    duration_seconds=int((ended_at - started_at).total_seconds()),
                    work_sessions_completed=work_sessions_completed,
                ))
        except SQLAlchemyError:
            logger.warning("Could not record %s interval", mode, exc_info=True)
            return
        logger.debug("Recorded %s interval ending %s", mode, ended_at)

    def recent(self, limit: int = 20) -> list[IntervalRecord]:
        """Newest intervals first."""
        stmt = (
            select(IntervalRecord)
            .order_by(IntervalRecord.ended_at.desc(), IntervalRecord.id.desc())
            .limit(limit)
        )
        try:
            with get_session() as db:
                return list(db.scalars(stmt))
        except SQLAlchemyError as exc:
            raise StorageError(f"cannot read interval history: {exc}") from exc

    def count_completed(self, mode: str | None = None) -> int:
        stmt = select(func.count(IntervalRecord.id))
        if mode is not None:
            stmt = stmt.where(IntervalRecord.mode == mode)
        try:
            with get_session() as db:
                return db.scalar(stmt) or 0
        except SQLAlchemyError as exc:
            raise StorageError(f"cannot read interval history: {exc}") from exc


def as_utc(value: datetime) -> datetime:
    """SQLite drops tzinfo on the way back; reattach UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
