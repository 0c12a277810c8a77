"""Gaussian smoothing of the IOI histogram."""

from __future__ import annotations

import numpy as np
from scipy.signal import convolve
from scipy.signal.windows import gaussian

KERNEL_SIZE = 2205
KERNEL_SIGMA = 360.0


def gaussian_kernel(size: int = KERNEL_SIZE, sigma: float = KERNEL_SIGMA) -> np.ndarray:
    """Sampled Gaussian centred on ``(size - 1) / 2``, normalized to sum 1."""
    window = gaussian(size, std=sigma, sym=True)
    return window / np.sum(window)


def smooth_histogram(histogram: np.ndarray, kernel: np.ndarray | None = None) -> np.ndarray:
    """Convolve *histogram* with *kernel*, keeping bins aligned.

    The histogram is zero-padded by ``len(kernel) - 1`` on both sides and
    the convolution is sliced back to the original length, offset by half
    the kernel.
    """
    if kernel is None:
        kernel = gaussian_kernel()
    histogram = np.asarray(histogram, dtype=np.float64)
    n = len(histogram)
    pad = np.zeros(len(kernel) - 1)
    padded = np.concatenate([pad, histogram, pad])
    full = convolve(padded, kernel, mode="valid", method="direct")
    offset = len(kernel) // 2
    return full[offset:offset + n]
