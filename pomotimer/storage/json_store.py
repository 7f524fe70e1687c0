"""JSON-file repositories backed by the app-data directory.

Each repository owns exactly one document and re-reads it on every
``load()``; nothing is cached, so edits made by another process are
picked up on the next call.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..errors import StorageError
from ..paths import app_data_dir
from ..settings import Settings
from ..timer.state import SessionState


logger = logging.getLogger(__name__)

SETTINGS_FILE_NAME = "settings.json"
SESSION_STATES_FILE_NAME = "session_states.json"


def _read_document(path: Path) -> dict[str, Any] | None:
    """Return the decoded JSON object at *path*, or None if it is missing."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise StorageError(f"cannot read {path}: {exc}") from exc

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageError(f"malformed JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise StorageError(f"expected a JSON object in {path}")
    return data


def _write_document(path: Path, data: dict[str, Any]) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        raise StorageError(f"cannot write {path}: {exc}") from exc


def _exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError as exc:
        raise StorageError(f"cannot stat {path}: {exc}") from exc


class JsonSettingsRepository:
    """``settings.json``: defaulted and persisted on first load."""

    def __init__(self, directory: Path | None = None) -> None:
        self._directory = directory

    @property
    def path(self) -> Path:
        directory = self._directory if self._directory is not None else app_data_dir()
        return directory / SETTINGS_FILE_NAME

    def load(self) -> Settings:
        path = self.path
        data = _read_document(path)
        if data is None:
            logger.info("No settings at %s, writing defaults", path)
            settings = Settings()
            self.save(settings)
            return settings

        try:
            settings = Settings.from_dict(data)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"invalid settings in {path}: {exc}") from exc
        logger.debug("Loaded settings from %s: %s", path, settings)
        return settings

    def save(self, settings: Settings) -> None:
        path = self.path
        _write_document(path, settings.to_dict())
        logger.debug("Saved settings to %s", path)

    def exists(self) -> bool:
        return _exists(self.path)


class JsonSessionRepository:
    """``session_states.json``: missing means never started."""

    def __init__(self, directory: Path | None = None) -> None:
        self._directory = directory

    @property
    def path(self) -> Path:
        directory = self._directory if self._directory is not None else app_data_dir()
        return directory / SESSION_STATES_FILE_NAME

    def load(self) -> SessionState:
        path = self.path
        data = _read_document(path)
        if data is None:
            return SessionState()

        try:
            state = SessionState.from_dict(data)
        except (TypeError, ValueError) as exc:
            raise StorageError(f"invalid session state in {path}: {exc}") from exc
        logger.debug("Loaded session state from %s: %s", path, state)
        return state

    def save(self, state: SessionState) -> None:
        path = self.path
        _write_document(path, state.to_dict())
        logger.debug("Saved session state to %s", path)

    def exists(self) -> bool:
        return _exists(self.path)
