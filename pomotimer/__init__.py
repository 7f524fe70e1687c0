"""PomoTimer: a persisted, single-user Pomodoro timer."""

from .errors import PomoTimerError, StorageError, InvalidModeError
from .settings import Settings
from .timer import Mode, SessionState, TimerEngine, duration_for, next_state

__version__ = "0.1.0"

__all__ = [
    "PomoTimerError",
    "StorageError",
    "InvalidModeError",
    "Settings",
    "Mode",
    "SessionState",
    "TimerEngine",
    "duration_for",
    "next_state",
]
