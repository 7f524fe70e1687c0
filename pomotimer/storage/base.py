"""Persistence interfaces the timer engine depends on."""

from __future__ import annotations

from typing import Protocol

from ..settings import Settings
from ..timer.state import SessionState


class SettingsRepository(Protocol):
    def load(self) -> Settings:
        """Return persisted settings, persisting the defaults on first run."""

    def save(self, settings: Settings) -> None: ...

    def exists(self) -> bool: ...


class SessionRepository(Protocol):
    def load(self) -> SessionState:
        """Return persisted state, or the zero value (not persisted)."""

    def save(self, state: SessionState) -> None: ...

    def exists(self) -> bool: ...
