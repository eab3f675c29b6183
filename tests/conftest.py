"""Shared pytest fixtures for WodTimer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from wodtimer.database.db import configure_engine, init_db
from wodtimer.timer.config import TimerMode
from wodtimer.timer.engine import TimerEngine


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


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep settings reads and writes inside the test's temp directory."""
    monkeypatch.setattr("wodtimer.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("wodtimer.settings.APP_SUPPORT_DIR", tmp_path)
    yield tmp_path


@pytest.fixture
def engine(qapp):
    """Fresh TimerEngine on AMRAP with the default parameters."""
    return TimerEngine(parent=None)


@pytest.fixture
def tabata_engine(qapp):
    return TimerEngine(parent=None, mode=TimerMode.TABATA)
