"""Database package."""

from .db import configure_engine, get_session, init_db
from .history import HistoryRecorder
from .models import IntervalRecord

__all__ = [
    "configure_engine",
    "get_session",
    "init_db",
    "HistoryRecorder",
    "IntervalRecord",
]
