"""Confidence-weighted inter-onset interval histogram."""

from __future__ import annotations

import logging

import numpy as np

from wavebpm.analysis.models import LevelPeaks
from wavebpm.analysis.peaks import round_half_up

logger = logging.getLogger(__name__)

# Neighbours checked on each side of an IOI.
DELTA = 4
# Beat deviation curve y = 320.67 * x^-0.3388 (ms as a function of BPM).
DEVIATION_SCALE_MS = 320.67
DEVIATION_EXPONENT = -0.3388


def beat_deviation_samples(ioi: float, sample_rate: float, scale: int) -> float:
    """Allowed deviation (in level samples) for a grid with period *ioi*.

    Faster tempi and deeper levels get a tighter tolerance.
    """
    half_sr = sample_rate / 2
    tempo_bpm = (half_sr * 60) / ioi
    deviation_ms = DEVIATION_SCALE_MS * tempo_bpm ** DEVIATION_EXPONENT
    return deviation_ms * half_sr / 1000 / scale


def confidence_weights(
    peaks: np.ndarray,
    iois: np.ndarray,
    sample_rate: float,
    scale: int,
) -> np.ndarray:
    """Score each IOI by how well it predicts its neighbouring peaks.

    For IOI ``i`` the periodic grid ``peak[i] + j * IOI[i]`` for
    ``j in -4..4`` is compared against the actual peaks; each peak within
    the beat deviation adds one vote. IOIs without four neighbours on each
    side keep a weight of zero.
    """
    weights = np.zeros(len(iois))
    for i in range(DELTA, len(iois) - DELTA):
        ioi = iois[i]
        if ioi <= 0:
            continue
        tolerance = beat_deviation_samples(ioi, sample_rate, scale)
        for j in range(-DELTA, DELTA + 1):
            if abs(peaks[i + j] - (peaks[i] + j * ioi)) <= tolerance:
                weights[i] += 1
    return weights


class IoiHistogram:
    """Vote accumulator indexed by interval length at the original rate.

    One instance is shared by every decomposition level of a single
    detection run.
    """

    def __init__(self, sample_rate: float) -> None:
        self.sample_rate = sample_rate
        self.bins = np.zeros(int(sample_rate / 2), dtype=np.float64)
        self.dropped = 0

    def __len__(self) -> int:
        return len(self.bins)

    def add_level(self, level: LevelPeaks) -> int:
        """Add weighted votes from one level; returns the number of votes cast."""
        weights = confidence_weights(level.peaks, level.iois, self.sample_rate, level.scale)
        half_sr = self.sample_rate / 2
        votes = 0
        for i in range(DELTA, len(level.iois) - DELTA):
            scaled = level.iois[i] * level.scale
            if not 0 < scaled < half_sr:
                self.dropped += 1
                continue
            index = round_half_up(scaled)
            if index >= len(self.bins):
                self.dropped += 1
                continue
            self.bins[index] += weights[i] / (2 * DELTA + 1)
            votes += 1
        logger.debug(f"  scale {level.scale}: {votes} votes, {self.dropped} dropped so far")
        return votes
