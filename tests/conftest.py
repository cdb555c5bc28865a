"""Shared pytest fixtures for FollowAlong tests."""

import os
import sys
import pytest

# Run Qt headless so QApplication can be created without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from followalong.database.db import configure_engine, init_db
from followalong.timer.cues import CueDispatcher
from followalong.timer.engine import TimerEngine

from helpers import FakeAudio, FakeHaptics, boxing_timeline


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def audio():
    return FakeAudio()


@pytest.fixture
def haptics():
    return FakeHaptics()


@pytest.fixture
def cues(audio, haptics):
    return CueDispatcher(audio=audio, haptics=haptics)


@pytest.fixture
def engine(qapp, cues):
    """Three 180 s rounds with a rest after each of the first two, no DB."""
    return TimerEngine(boxing_timeline(3), cues=cues, db_enabled=False)


@pytest.fixture
def engine_db(qapp, cues):
    """Same timeline, session logging ON."""
    eng = TimerEngine(boxing_timeline(3), cues=cues, db_enabled=True)
    eng.workout_id = "wk-1"
    eng.workout_name = "Test Workout"
    return eng
