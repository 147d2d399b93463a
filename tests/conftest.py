"""Shared pytest fixtures for Ascent tests."""

import os
import sys
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from ascent.database.db import configure_engine, init_db
from ascent.timer.config import TimerConfig
from ascent.timer.engine import TimerEngine
from ascent.timer.plan import PAIR_PATTERN

from helpers import RecordingCuePlayer


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
def player():
    return RecordingCuePlayer()


@pytest.fixture
def pair_config():
    """5 min practice / 1 min rest, 3 sets of (practice, rest)."""
    return TimerConfig(practice_sec=300, rest_sec=60, set_count=3, pattern=PAIR_PATTERN)


@pytest.fixture
def engine(qapp, player, pair_config):
    """TimerEngine on the pair pattern with DB disabled."""
    return TimerEngine(config=pair_config, cue_player=player, db_enabled=False)


@pytest.fixture
def ring_engine(qapp, player):
    """TimerEngine on the default ring pattern (A, rest, B, rest)."""
    config = TimerConfig(practice_sec=60, rest_sec=30, set_count=2)
    return TimerEngine(config=config, cue_player=player, db_enabled=False)


@pytest.fixture
def engine_db(qapp, player, pair_config):
    """TimerEngine that saves a record when the session finishes."""
    return TimerEngine(config=pair_config, cue_player=player, db_enabled=True)
