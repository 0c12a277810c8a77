"""Stable peak picking and inter-onset intervals for one decomposition level."""

from __future__ import annotations

import logging
import math

import numpy as np

from wavebpm.analysis.models import LevelPeaks, PeakRun
from wavebpm.errors import InvalidInputError

logger = logging.getLogger(__name__)

# Window spans 1/8 s at the level's rate; it slides in 20 hops per length.
WINDOW_DIVISOR = 8
WINDOWS_PER_CYCLE = 20
STABILITY_RATIO = 0.9
# Levels with this many IOIs or fewer are skipped.
MIN_IOIS = 4


def round_half_up(value: float) -> int:
    """Round a non-negative value to the nearest integer, halves upward."""
    return int(math.floor(value + 0.5))


def window_length(sample_rate: float, scale: int) -> int:
    """Sliding-window length in samples for a level with the given scale."""
    return round_half_up((sample_rate / WINDOW_DIVISOR) / scale)


def pick_window_peaks(detail: np.ndarray, window: int) -> np.ndarray:
    """Slide a window over *detail* and record the index of each maximum.

    Starts at index 1 and advances by ``window // 20``. Successive windows
    overlap heavily, so the same peak usually repeats many times.
    """
    hop = window // WINDOWS_PER_CYCLE
    if hop < 1:
        raise InvalidInputError(
            f"Window of {window} samples is too short to slide "
            f"in {WINDOWS_PER_CYCLE} hops; sample rate too low"
        )

    positions = []
    i = 1
    stop = len(detail) - window
    while i < stop:
        positions.append(i + int(np.argmax(detail[i:i + window])))
        i += hop
    return np.asarray(positions, dtype=np.float64)


def compress_runs(candidates: np.ndarray) -> list[PeakRun]:
    """Collapse consecutive equal positions into ``PeakRun`` records."""
    runs: list[PeakRun] = []
    for position in candidates:
        if runs and runs[-1].position == position:
            runs[-1].count += 1
        else:
            runs.append(PeakRun(position=float(position)))
    return runs


def stable_peaks(runs: list[PeakRun]) -> np.ndarray:
    """Keep peaks that stayed the window maximum for >= 90% of a cycle."""
    threshold = WINDOWS_PER_CYCLE * STABILITY_RATIO
    return np.array([r.position for r in runs if r.count >= threshold], dtype=np.float64)


def inter_onset_intervals(peaks: np.ndarray) -> np.ndarray:
    """Distances between consecutive peaks."""
    return np.diff(peaks)


def extract_level(detail: np.ndarray, scale: int, sample_rate: float) -> LevelPeaks | None:
    """Find stable peaks and IOIs in a rectified detail sequence.

    Returns ``None`` when the level yields too few intervals to vote.
    """
    window = window_length(sample_rate, scale)
    candidates = pick_window_peaks(detail, window)
    runs = compress_runs(candidates)
    peaks = stable_peaks(runs)
    iois = inter_onset_intervals(peaks)

    logger.debug(
        f"  scale {scale}: window={window}, {len(candidates)} candidates, "
        f"{len(runs)} runs, {len(peaks)} stable peaks"
    )

    if len(iois) <= MIN_IOIS:
        return None
    return LevelPeaks(peaks=peaks, iois=iois, scale=scale, window_length=window)
