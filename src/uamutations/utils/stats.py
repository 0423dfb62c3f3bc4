from __future__ import annotations

from typing import Sequence

import numpy as np


def mean_sd(values: Sequence[float] | np.ndarray) -> tuple[float, float]:
    """Return the mean and sample (``n - 1``) standard deviation of ``values``.

    A single observation has an undefined sample deviation and yields ``nan``.
    """

    arr = np.asarray(values, dtype=float).ravel()
    if arr.size == 0:
        raise ValueError("values must not be empty")
    mean = float(arr.mean())
    if arr.size == 1:
        return mean, float("nan")
    return mean, float(arr.std(ddof=1))
