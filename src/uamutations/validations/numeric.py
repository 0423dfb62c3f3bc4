"""Numerical preconditions shared by the ranking, matching and regression code."""
from __future__ import annotations

import numpy as np


class NumericalError(ArithmeticError):
    pass


def require_finite(values: np.ndarray, label: str) -> None:
    arr = np.asarray(values, dtype=float)
    bad = ~np.isfinite(arr)
    if bad.any():
        first = tuple(int(i) for i in np.argwhere(bad)[0])
        raise NumericalError(
            f"{label} contains {int(bad.sum())} non-finite value(s); first at {first}"
        )


def require_nonzero_variance(std_devs: np.ndarray, label: str) -> None:
    zero_rows = np.flatnonzero(~(np.asarray(std_devs) > 0.0))
    if zero_rows.size:
        raise NumericalError(
            f"{label}: variable row(s) {zero_rows.tolist()} have zero variance "
            "and cannot be standardised"
        )


def require_nonzero(values: np.ndarray, label: str) -> None:
    zeros = np.flatnonzero(np.asarray(values) == 0.0)
    if zeros.size:
        raise NumericalError(
            f"{label}: relative differences are undefined for zero values "
            f"(observation(s) {zeros[:10].tolist()})"
        )
