"""Pomodoro session state machine for PomoTimer.

Modes
-----
WORK          Focus interval.
SHORT_BREAK   Break after a work interval.
LONG_BREAK    Break after every Nth work interval.

Transitions
-----------
(unset)     → WORK                         (start)
WORK        → SHORT_BREAK | LONG_BREAK     (work interval elapsed)
*_BREAK     → WORK                         (break interval elapsed)
any         → (unset)                      (reset)

The engine holds no timer state of its own.  Every operation re-reads
settings and session state from the injected repositories, computes, and
writes the result back.  Transitions happen lazily: any query first calls
``advance_if_due()``, which moves the session forward by at most one mode.

Pausing only sets a flag; the countdown keeps running against
``current_mode_started_at``.  Resuming restarts the current mode with a
fresh, full interval.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Callable

from ..errors import InvalidModeError
from ..settings import Settings
from .state import Mode, SessionState

if TYPE_CHECKING:
    from ..database.history import HistoryRecorder
    from ..storage.base import SessionRepository, SettingsRepository


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# ── pure transition logic ─────────────────────────────────────────────────


def duration_for(mode: str, settings: Settings) -> timedelta:
    """Length of one *mode* interval under *settings*."""
    try:
        parsed = Mode(mode)
    except ValueError:
        raise InvalidModeError(mode) from None

    if parsed is Mode.WORK:
        minutes = settings.work_minutes
    elif parsed is Mode.SHORT_BREAK:
        minutes = settings.short_break_minutes
    else:
        minutes = settings.long_break_minutes
    return timedelta(minutes=minutes)


def next_state(state: SessionState, settings: Settings) -> SessionState:
    """The state that follows *state* once its current mode has elapsed.

    The new mode starts at the computed end of the previous one, not at
    "now", so the schedule never drifts with call latency.
    """
    duration = duration_for(state.mode, settings)
    if state.current_mode_started_at is None:
        raise ValueError(f"mode {state.mode!r} has no start time")

    mode_end = state.current_mode_started_at + duration
    count = state.completed_work_sessions

    if state.mode == Mode.WORK.value:
        count += 1
        if count % settings.long_break_interval == 0:
            next_mode = Mode.LONG_BREAK
        else:
            next_mode = Mode.SHORT_BREAK
    else:
        next_mode = Mode.WORK

    return SessionState(
        mode=next_mode.value,
        current_mode_started_at=mode_end,
        session_started_at=state.session_started_at,
        paused=False,
        completed_work_sessions=count,
    )


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine:
    """Read-compute-write operations over persisted settings and state.

    Each public method runs under a single process-local lock so that
    overlapping UI callbacks cannot lose each other's updates.
    """

    def __init__(
        self,
        settings_repo: SettingsRepository,
        session_repo: SessionRepository,
        *,
        clock: Clock = utc_now,
        history: HistoryRecorder | None = None,
    ) -> None:
        self._settings_repo = settings_repo
        self._session_repo = session_repo
        self._clock = clock
        self._history = history
        self._lock = threading.RLock()

    # ══════════════════════════════════════════════════════════════════
    #  READS
    # ══════════════════════════════════════════════════════════════════

    def settings(self) -> Settings:
        with self._lock:
            return self._settings_repo.load()

    def session_state(self) -> SessionState:
        """The persisted state as-is (no implicit advance)."""
        with self._lock:
            return self._session_repo.load()

    def elapsed_time(self) -> timedelta:
        """Time spent in the *current* mode, after any due advance.

        Raises ``InvalidModeError`` if the stored mode is unknown.
        """
        with self._lock:
            self.advance_if_due()
            state = self._session_repo.load()
            if state.current_mode_started_at is None:
                return timedelta(0)
            return self._clock() - state.current_mode_started_at

    def remaining_time(self) -> timedelta:
        """Time left in the current mode, never negative."""
        with self._lock:
            self.advance_if_due()
            state = self._session_repo.load()
            if state.current_mode_started_at is None:
                return timedelta(0)

            settings = self._settings_repo.load()
            elapsed = self._clock() - state.current_mode_started_at
            remaining = duration_for(state.mode, settings) - elapsed
            return max(remaining, timedelta(0))

    def preview_next_state(self) -> SessionState:
        """What the session will look like after the current mode ends."""
        with self._lock:
            state = self._session_repo.load()
            settings = self._settings_repo.load()
            return next_state(state, settings)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> SessionState:
        """Begin a new session in WORK mode, discarding any previous one."""
        with self._lock:
            now = self._clock()
            state = SessionState(
                mode=Mode.WORK.value,
                current_mode_started_at=now,
                session_started_at=now,
                paused=False,
                completed_work_sessions=0,
            )
            self._session_repo.save(state)
            logger.info("Session started at %s", now.isoformat())
            return state

    def pause(self) -> SessionState:
        """Flag the session as paused.  The countdown is not frozen."""
        with self._lock:
            state = replace(self._session_repo.load(), paused=True)
            self._session_repo.save(state)
            logger.info("Session paused in mode %r", state.mode)
            return state

    def resume(self) -> SessionState:
        """Clear the pause flag and restart the current mode from now."""
        with self._lock:
            state = replace(
                self._session_repo.load(),
                paused=False,
                current_mode_started_at=self._clock(),
            )
            self._session_repo.save(state)
            logger.info("Session resumed in mode %r", state.mode)
            return state

    def reset(self) -> SessionState:
        """Clear the session back to the never-started state."""
        with self._lock:
            state = SessionState()
            self._session_repo.save(state)
            logger.info("Session reset")
            return state

    def update_settings(self, settings: Settings) -> None:
        with self._lock:
            self._settings_repo.save(settings)
            logger.info("Settings updated: %s", settings)

    # ══════════════════════════════════════════════════════════════════
    #  ADVANCE
    # ══════════════════════════════════════════════════════════════════

    def advance_if_due(self) -> bool:
        """Move to the next mode if the current one has elapsed.

        Advances a single step even when several intervals are overdue.
        Returns True when a new state was persisted.
        """
        with self._lock:
            state = self._session_repo.load()
            if state.current_mode_started_at is None:
                return False

            settings = self._settings_repo.load()
            mode_end = state.current_mode_started_at + duration_for(state.mode, settings)
            if self._clock() < mode_end:
                return False

            new_state = next_state(state, settings)
            self._session_repo.save(new_state)
            logger.info(
                "Advanced %s → %s (work sessions completed: %d)",
                state.mode, new_state.mode, new_state.completed_work_sessions,
            )

            if self._history is not None:
                self._history.record_interval(
                    mode=state.mode,
                    started_at=state.current_mode_started_at,
                    ended_at=mode_end,
                    work_sessions_completed=new_state.completed_work_sessions,
                )
            return True
