"""Wavelet-based tempo (BPM) detection."""

from wavebpm.analysis.detector import BpmDetector, compute
from wavebpm.analysis.dynamics import dynamic_range
from wavebpm.analysis.models import BpmDebug, BpmResult
from wavebpm.analysis.wavelet import Daubechies
from wavebpm.errors import BpmDetectionError, InvalidInputError, NoTempoFoundError

__all__ = [
    "BpmDetector",
    "compute",
    "dynamic_range",
    "BpmDebug",
    "BpmResult",
    "Daubechies",
    "BpmDetectionError",
    "InvalidInputError",
    "NoTempoFoundError",
]
