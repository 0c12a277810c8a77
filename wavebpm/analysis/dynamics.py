"""Signal level helpers."""

import numpy as np

from wavebpm.errors import InvalidInputError


def dynamic_range(samples) -> float:
    """Root-mean-square energy of *samples*."""
    data = np.asarray(samples, dtype=np.float64).ravel()
    if data.size == 0:
        raise InvalidInputError("Cannot compute dynamic range of an empty buffer")
    return float(np.sqrt(np.mean(data * data)))
