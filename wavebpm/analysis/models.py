"""Core data models for tempo detection."""

from dataclasses import dataclass

import numpy as np


@dataclass
class PeakRun:
    """A run of identical window-maximum positions."""
    position: float  # sample index within the level's detail sequence
    count: int = 1


@dataclass
class DecompositionLevel:
    """Coefficients produced by one filter-bank stage."""
    index: int
    approximation: np.ndarray
    detail: np.ndarray

    @property
    def scale(self) -> int:
        """Time-scale factor of this level relative to the first one."""
        return 2 ** self.index


@dataclass
class LevelPeaks:
    """Stable peak positions and their inter-onset intervals for one level."""
    peaks: np.ndarray
    iois: np.ndarray
    scale: int
    window_length: int


@dataclass
class BpmDebug:
    """Histograms kept for visualization."""
    occurrence: np.ndarray  # raw weighted IOI histogram
    amplitude: np.ndarray  # Gaussian-smoothed histogram


@dataclass
class BpmResult:
    """Tempo estimate for one buffer."""
    bpm: float
    debug: BpmDebug | None = None
