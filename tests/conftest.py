"""Pytest configuration and fixtures for the test suite."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Ensure project root is in path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tests.fixtures import generate_jittered_timestamps, generate_label_blocks  # noqa: E402


@pytest.fixture
def regular_timestamps() -> np.ndarray:
    """Eleven samples spaced 1 ms apart, starting at 0."""
    return np.arange(11, dtype=np.float64)


@pytest.fixture
def scenario_no_gap() -> tuple[list[float], list[str]]:
    """Label changes on a regular 1 ms grid, no timing gaps.

    Returns:
        Tuple of (t_ms, labels).
    """
    t_ms = [0, 1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
    labels = ["A", "A", "A", "B", "B", "B", "B", "A", "A", "A", "A"]
    return t_ms, labels


@pytest.fixture
def scenario_with_gap() -> tuple[list[float], list[str]]:
    """One label on a 1 ms grid with a jump from 2 ms to 10 ms.

    Returns:
        Tuple of (t_ms, labels).
    """
    t_ms = [0, 1, 2, 10, 11, 12]
    labels = ["A"] * 6
    return t_ms, labels


@pytest.fixture
def eye_tracker_recording() -> tuple[np.ndarray, list[str]]:
    """A 60 Hz recording with jitter and three stimulus blocks.

    Returns:
        Tuple of (t_ms, labels).
    """
    t_ms = generate_jittered_timestamps(num_samples=600, fs=60.0, jitter_ms=1.0, seed=7)
    labels = generate_label_blocks([("fixation", 100), ("face", 300), ("house", 200)])
    return t_ms, labels


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow"
    )
