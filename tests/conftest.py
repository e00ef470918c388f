"""Shared pytest fixtures for detimer tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from detimer.timer.engine import TickEngine

from helpers import FakeClock, RecordingSink


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    yield app


@pytest.fixture
def clock():
    """Fake clock advancing one second per read."""
    return FakeClock(step=1.0)


@pytest.fixture
def engine(qapp, clock):
    """TickEngine on the fake clock, polling as fast as the event loop allows."""
    return TickEngine(clock=clock, poll_interval_ms=0)


@pytest.fixture
def sink():
    return RecordingSink()
