"""Shared test fixtures for tempo detector tests."""

import numpy as np
import pytest
from fastapi.testclient import TestClient

from wavebpm.main import app


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


def generate_click_track(
    bpm: float,
    duration_seconds: float = 10.0,
    sr: int = 22050,
    decay: float = 400.0,
) -> np.ndarray:
    """Generate a synthetic click track with one click per beat.

    Each click is a 20 ms exponentially decaying pulse, so its onset is a
    sharp broadband step. Click positions are rounded to whole samples from
    the exact beat grid, so the period does not drift.

    Returns mono float32 audio at the given sample rate.
    """
    n_samples = int(duration_seconds * sr)
    audio = np.zeros(n_samples, dtype=np.float32)

    period = 60.0 / bpm * sr  # samples per beat
    click_samples = int(0.02 * sr)
    t_click = np.arange(click_samples) / sr
    click = np.exp(-t_click * decay)

    beat = 0
    while True:
        sample_pos = int(round(beat * period))
        if sample_pos >= n_samples:
            break
        end = min(sample_pos + click_samples, n_samples)
        audio[sample_pos:end] += click[:end - sample_pos]
        beat += 1

    return audio


def generate_sine(freq: float, duration_seconds: float = 10.0, sr: int = 22050) -> np.ndarray:
    """Steady sinusoid with no onsets."""
    t = np.arange(int(duration_seconds * sr)) / sr
    return (0.5 * np.sin(2 * np.pi * freq * t)).astype(np.float32)


@pytest.fixture
def click_120():
    """Click track at 120 BPM, 22050 Hz."""
    return generate_click_track(bpm=120, duration_seconds=10)


@pytest.fixture
def silence():
    """Ten seconds of digital silence at 22050 Hz."""
    return np.zeros(10 * 22050, dtype=np.float32)
