"""Wiring: build a TimerEngine over the on-disk stores."""

from __future__ import annotations

from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from .database.db import DB_FILE_NAME, configure_engine, init_db
from .database.history import HistoryRecorder
from .errors import StorageError
from .storage.json_store import JsonSessionRepository, JsonSettingsRepository
from .timer.engine import Clock, TimerEngine, utc_now


def build_engine(
    directory: Path | None = None,
    *,
    record_history: bool = True,
    clock: Clock = utc_now,
) -> TimerEngine:
    """Engine backed by ``settings.json`` / ``session_states.json``.

    *directory* defaults to the platform app-data directory.  With
    *record_history* every automatic advance is also written to
    ``history.db``.
    """
    history = None
    if record_history:
        try:
            if directory is not None:
                directory.mkdir(parents=True, exist_ok=True)
                configure_engine(f"sqlite:///{directory / DB_FILE_NAME}")
            init_db()
        except (OSError, SQLAlchemyError) as exc:
            raise StorageError(f"cannot open history database: {exc}") from exc
        history = HistoryRecorder()

    return TimerEngine(
        JsonSettingsRepository(directory),
        JsonSessionRepository(directory),
        clock=clock,
        history=history,
    )
