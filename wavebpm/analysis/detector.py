"""Tempo detector - runs the wavelet pyramid and histogram vote."""

from __future__ import annotations

import logging
import math

import numpy as np

from wavebpm.analysis.histogram import IoiHistogram
from wavebpm.analysis.models import BpmDebug, BpmResult, DecompositionLevel
from wavebpm.analysis.peaks import WINDOWS_PER_CYCLE, extract_level, window_length
from wavebpm.analysis.smoothing import gaussian_kernel, smooth_histogram
from wavebpm.analysis.wavelet import Daubechies, minimum_input_length, transform
from wavebpm.config import settings
from wavebpm.errors import InvalidInputError, NoTempoFoundError

logger = logging.getLogger(__name__)

DEFAULT_LEVELS = 4


def interval_to_bpm(interval: float, sample_rate: float) -> float:
    """Convert a histogram bin (interval in samples) to beats per minute."""
    return (sample_rate / 2 * 60) / interval


class BpmDetector:
    """Estimates a single global tempo from a mono buffer.

    The detector holds configuration only; every call to :meth:`compute`
    allocates its own histogram, so one instance can be shared freely.
    """

    def __init__(self, wavelet: Daubechies | int = Daubechies.DB2, levels: int = DEFAULT_LEVELS):
        try:
            self.wavelet = Daubechies(wavelet)
        except ValueError:
            raise InvalidInputError(f"Unknown Daubechies wavelet index: {wavelet}") from None
        if levels < 1:
            raise InvalidInputError(f"At least one decomposition level is required, got {levels}")
        self.levels = levels
        self._kernel = gaussian_kernel()

    @property
    def minimum_length(self) -> int:
        return minimum_input_length(self.levels, self.wavelet)

    def _validate(self, samples, sample_rate: float) -> np.ndarray:
        data = np.asarray(samples, dtype=np.float64)
        if data.ndim != 1:
            raise InvalidInputError(f"Expected a mono 1-D buffer, got shape {data.shape}")
        if data.size == 0:
            raise InvalidInputError("Sample buffer is empty")
        if not math.isfinite(sample_rate) or sample_rate <= 0:
            raise InvalidInputError(f"Sample rate must be positive, got {sample_rate}")
        if len(data) < self.minimum_length:
            raise InvalidInputError(
                f"Buffer of {len(data)} samples is shorter than the {self.minimum_length} "
                f"needed for {self.levels} levels of {self.wavelet.name.lower()}"
            )
        deepest = 2 ** (self.levels - 1)
        if window_length(sample_rate, deepest) < WINDOWS_PER_CYCLE:
            raise InvalidInputError(f"Sample rate {sample_rate} Hz is too low for {self.levels} levels")
        return data

    def decompose(self, data: np.ndarray):
        """Yield each ``DecompositionLevel`` of the wavelet pyramid."""
        approximation = data
        for k in range(self.levels):
            approximation, detail = transform(approximation, self.wavelet)
            yield DecompositionLevel(index=k, approximation=approximation, detail=detail)

    def compute(self, samples, sample_rate: float, include_debug: bool = True) -> BpmResult:
        """Estimate the tempo of *samples*.

        Raises ``InvalidInputError`` on precondition failures and
        ``NoTempoFoundError`` when no level yields a usable periodicity.
        """
        data = self._validate(samples, sample_rate)
        logger.info(f"Analyzing {len(data) / sample_rate:.1f}s of audio at {sample_rate:g}Hz")

        histogram = IoiHistogram(sample_rate)
        for level in self.decompose(data):
            # Full-wave rectification
            rectified = np.abs(level.detail)
            peaks = extract_level(rectified, level.scale, sample_rate)
            if peaks is None:
                logger.debug(f"Level {level.index}: too few intervals, skipped")
                continue
            histogram.add_level(peaks)

        amplitude = smooth_histogram(histogram.bins, self._kernel)
        peak_index = int(np.argmax(amplitude))
        if peak_index == 0 or amplitude[peak_index] <= 0:
            raise NoTempoFoundError(
                "No confident tempo found",
                occurrence=histogram.bins,
                amplitude=amplitude,
            )

        bpm = interval_to_bpm(peak_index, sample_rate)
        logger.info(f"  Tempo: {bpm:.2f} BPM (interval {peak_index} samples, "
                    f"{histogram.dropped} votes dropped)")

        debug = BpmDebug(occurrence=histogram.bins, amplitude=amplitude) if include_debug else None
        return BpmResult(bpm=bpm, debug=debug)


def compute(samples, sample_rate: float, include_debug: bool | None = None) -> BpmResult:
    """Estimate tempo with a detector configured from settings."""
    detector = BpmDetector(wavelet=settings.wavelet, levels=settings.levels)
    if include_debug is None:
        include_debug = settings.include_debug
    return detector.compute(samples, sample_rate, include_debug=include_debug)
