"""Storage package."""

from .base import SettingsRepository, SessionRepository
from .json_store import (
    JsonSettingsRepository,
    JsonSessionRepository,
    SETTINGS_FILE_NAME,
    SESSION_STATES_FILE_NAME,
)
from .memory import InMemorySettingsRepository, InMemorySessionRepository

__all__ = [
    "SettingsRepository",
    "SessionRepository",
    "JsonSettingsRepository",
    "JsonSessionRepository",
    "SETTINGS_FILE_NAME",
    "SESSION_STATES_FILE_NAME",
    "InMemorySettingsRepository",
    "InMemorySessionRepository",
]
