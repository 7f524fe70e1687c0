"""Timer package."""

from .state import Mode, SessionState, UNSET_MODE
from .engine import (
    TimerEngine,
    duration_for,
    next_state,
    utc_now,
)

__all__ = [
    "Mode",
    "SessionState",
    "UNSET_MODE",
    "TimerEngine",
    "duration_for",
    "next_state",
    "utc_now",
]
