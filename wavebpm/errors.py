"""Exceptions raised by the tempo detector."""

from __future__ import annotations

import numpy as np


class BpmDetectionError(Exception):
    """Base class for all detector errors."""


class InvalidInputError(BpmDetectionError, ValueError):
    """Input buffer or sample rate violates a precondition."""


class NoTempoFoundError(BpmDetectionError):
    """No decomposition level produced a confident periodicity.

    The raw and smoothed histograms are attached so callers can still
    render what the detector saw.
    """

    def __init__(
        self,
        message: str,
        occurrence: np.ndarray | None = None,
        amplitude: np.ndarray | None = None,
    ) -> None:
        super().__init__(message)
        self.occurrence = occurrence
        self.amplitude = amplitude
