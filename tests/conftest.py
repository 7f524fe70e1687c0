"""Shared pytest fixtures for PomoTimer tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from pomotimer.database.db import configure_engine, init_db
from pomotimer.settings import Settings
from pomotimer.storage.memory import InMemorySessionRepository, InMemorySettingsRepository
from pomotimer.timer.engine import TimerEngine

from helpers import T0, FakeClock, RecordingHistory


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep every test away from the real app-data directory."""
    home = tmp_path / "appdata"
    monkeypatch.setenv("POMOTIMER_HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock(T0)


@pytest.fixture
def settings_repo():
    return InMemorySettingsRepository()


@pytest.fixture
def session_repo():
    return InMemorySessionRepository()


@pytest.fixture
def history():
    return RecordingHistory()


@pytest.fixture
def engine(settings_repo, session_repo, clock, history):
    """Engine over in-memory stores, default settings, fake clock."""
    return TimerEngine(settings_repo, session_repo, clock=clock, history=history)


@pytest.fixture
def make_engine(session_repo, clock, history):
    """Factory for an engine with custom settings."""
    def _make(**overrides) -> TimerEngine:
        repo = InMemorySettingsRepository(Settings(**overrides))
        return TimerEngine(repo, session_repo, clock=clock, history=history)
    return _make
