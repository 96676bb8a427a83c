"""Shared pytest fixtures for HIITTime tests."""

import sys
import pytest

from PyQt6.QtWidgets import QApplication

from hiittime.timer.sequencer import PhaseSequencer, SessionConfig


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def sequencer(qapp):
    """Fresh, idle PhaseSequencer."""
    return PhaseSequencer(parent=None)


@pytest.fixture
def scenario_a():
    """3 s lead-in, 5 s work, 2 s rest, 2 reps."""
    return SessionConfig(
        lead_in_seconds=3, work_seconds=5, rest_seconds=2,
        repetitions=2, cue_enabled=True,
    )
