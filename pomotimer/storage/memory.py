"""In-memory repositories for tests and embedding."""

from __future__ import annotations

from ..settings import Settings
from ..timer.state import SessionState


class InMemorySettingsRepository:
    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self.saves = 0

    def load(self) -> Settings:
        if self._settings is None:
            self.save(Settings())
        return self._settings

    def save(self, settings: Settings) -> None:
        self._settings = settings
        self.saves += 1

    def exists(self) -> bool:
        return self._settings is not None


class InMemorySessionRepository:
    def __init__(self, state: SessionState | None = None) -> None:
        self._state = state
        self.saves = 0

    def load(self) -> SessionState:
        if self._state is None:
            return SessionState()
        return self._state

    def save(self, state: SessionState) -> None:
        self._state = state
        self.saves += 1

    def exists(self) -> bool:
        return self._state is not None
