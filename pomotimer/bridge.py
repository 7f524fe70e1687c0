"""Qt binding layer between a front end and the TimerEngine.

Signals
-------
tick(remaining_seconds: int)
    Emitted on every poll while polling is active.
mode_changed(mode: str)
    Emitted when the persisted mode differs from the last one seen,
    including lazy advances picked up by the poll.  ``""`` means the
    session is not running.
state_changed(state: SessionState)
    Emitted after every control call and whenever the mode changes.
error_occurred(message: str)
    Emitted when a poll fails.  Direct method calls raise instead.
"""

from __future__ import annotations

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .errors import PomoTimerError
from .settings import Settings
from .timer.engine import TimerEngine
from .timer.state import SessionState


POLL_INTERVAL_MS = 1000


class PomodoroBridge(QObject):
    """Exposes the GUI-facing timer operations plus a polling ticker."""

    tick = pyqtSignal(int)
    mode_changed = pyqtSignal(str)
    state_changed = pyqtSignal(object)
    error_occurred = pyqtSignal(str)

    def __init__(
        self,
        engine: TimerEngine,
        parent: QObject | None = None,
        *,
        poll_interval_ms: int = POLL_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._last_mode: str | None = None

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(poll_interval_ms)
        self._qt_timer.timeout.connect(self._on_tick)

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def is_polling(self) -> bool:
        return self._qt_timer.isActive()

    def start_polling(self) -> None:
        self._on_tick()
        self._qt_timer.start()

    def stop_polling(self) -> None:
        self._qt_timer.stop()

    # ══════════════════════════════════════════════════════════════════
    #  QUERIES
    # ══════════════════════════════════════════════════════════════════

    def get_settings(self) -> Settings:
        return self._engine.settings()

    def get_session_state(self) -> SessionState:
        return self._engine.session_state()

    def elapsed_seconds(self) -> int:
        return int(self._engine.elapsed_time().total_seconds())

    def remaining_seconds(self) -> int:
        return int(self._engine.remaining_time().total_seconds())

    def next_state_preview(self) -> SessionState:
        return self._engine.preview_next_state()

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        self._publish(self._engine.start())

    def pause(self) -> None:
        self._publish(self._engine.pause())

    def resume(self) -> None:
        self._publish(self._engine.resume())

    def reset(self) -> None:
        self._publish(self._engine.reset())

    def update_settings(self, settings: Settings) -> None:
        self._engine.update_settings(settings)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _publish(self, state: SessionState) -> None:
        if state.mode != self._last_mode:
            self._last_mode = state.mode
            self.mode_changed.emit(state.mode)
        self.state_changed.emit(state)

    def _on_tick(self) -> None:
        try:
            remaining = self._engine.remaining_time()
            state = self._engine.session_state()
        except PomoTimerError as exc:
            self.error_occurred.emit(str(exc))
            return

        if state.mode != self._last_mode:
            self._publish(state)
        self.tick.emit(int(remaining.total_seconds()))
