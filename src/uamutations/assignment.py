"""Minimum-cost order-preserving pairing of two sorted sequences.

The pairing is found with a dynamic programme over an ``(n + 1) x (m + 1)``
table. ``cost[i, j]`` is the smallest total absolute difference achievable when
``min(i, j)`` elements are paired between the first ``i`` elements of ``A`` and
the first ``j`` elements of ``B`` without crossings. Three transitions are
available::

    match   cost[i-1, j-1] + |A[i-1] - B[j-1]|
    skip A  cost[i-1, j]        (only while i > j)
    skip B  cost[i, j-1]        (only while j > i)

For equal-length inputs every element on both sides is paired. Only one cost
row is held at a time; the choice table is kept whole so the pairing can be
recovered by walking it backwards from ``(n, m)``.
"""
from __future__ import annotations

import logging
from typing import NamedTuple, Sequence

import numpy as np

from .progress_utils import MatchProgressReporter
from .utils.memory import table_nbytes
from .validations import require_finite

logger = logging.getLogger(__name__)

_NONE = 0
_MATCH = 1
_SKIP_B = 2
_SKIP_A = 3


class Pairing(NamedTuple):
    partner: np.ndarray
    """``partner[i]`` is the position in ``B`` paired with ``A[i]`` (``-1`` if unpaired)."""
    cost: float


def _as_sorted_vector(values: Sequence[float] | np.ndarray, label: str) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"{label} must be one-dimensional; received shape {arr.shape}")
    if arr.size == 0:
        raise ValueError(f"{label} must not be empty")
    require_finite(arr, label)
    if arr.size > 1 and np.any(np.diff(arr) < 0):
        raise ValueError(f"{label} must be sorted in ascending order")
    return arr


def monotone_pairing(
    sorted_a: Sequence[float] | np.ndarray,
    sorted_b: Sequence[float] | np.ndarray,
) -> Pairing:
    """Pair two ascending sequences with minimal total absolute difference.

    Parameters
    ----------
    sorted_a, sorted_b
        Ascending, finite, non-empty sequences. They may differ in length, in
        which case the surplus elements of the longer side stay unpaired.

    Returns
    -------
    Pairing
        Partner positions for every element of ``sorted_a`` and the total cost.
        Partners are strictly increasing wherever defined.
    """

    a = _as_sorted_vector(sorted_a, "sorted_a")
    b = _as_sorted_vector(sorted_b, "sorted_b")
    n, m = a.shape[0], b.shape[0]

    logger.debug(
        "Building %dx%d monotone choice table (%.1f MB)",
        n + 1,
        m + 1,
        table_nbytes(n, m) / 1e6,
    )

    choice = np.zeros((n + 1, m + 1), dtype=np.int8)
    choice[0, 1:] = _SKIP_B
    prev = np.zeros(m + 1, dtype=float)

    with MatchProgressReporter("monotone pairing", n) as progress:
        for i in range(1, n + 1):
            cur = np.full(m + 1, np.inf)
            cur[0] = 0.0
            choice[i, 0] = _SKIP_A

            diag = prev[:-1] + np.abs(a[i - 1] - b)

            lower = min(i - 1, m)
            if lower > 0:
                up = prev[1 : lower + 1]
                take_diag = diag[:lower] <= up
                cur[1 : lower + 1] = np.where(take_diag, diag[:lower], up)
                choice[i, 1 : lower + 1] = np.where(take_diag, _MATCH, _SKIP_A)

            if i <= m:
                cur[i] = diag[i - 1]
                choice[i, i] = _MATCH
                if i < m:
                    tail = diag[i:]
                    running = np.minimum.accumulate(np.concatenate(([cur[i]], tail)))
                    cur[i + 1 :] = running[1:]
                    choice[i, i + 1 :] = np.where(tail <= running[:-1], _MATCH, _SKIP_B)

            prev = cur
            progress.update()

    total = float(prev[m])

    partner = np.full(n, -1, dtype=np.int64)
    i, j = n, m
    while i > 0 and j > 0:
        step = choice[i, j]
        if step == _MATCH:
            partner[i - 1] = j - 1
            i -= 1
            j -= 1
        elif step == _SKIP_B:
            j -= 1
        elif step == _SKIP_A:
            i -= 1
        else:  # pragma: no cover - table is fully populated above
            raise RuntimeError(f"Unpopulated choice table entry at ({i}, {j})")

    return Pairing(partner=partner, cost=total)


def reorder_min_diff(
    arr1: Sequence[float] | np.ndarray,
    arr2: Sequence[float] | np.ndarray,
) -> np.ndarray:
    """Return the elements of ``arr2`` aligned with ``arr1`` for minimal overall difference.

    Both inputs must be sorted and of equal length.
    """

    a = np.asarray(arr1, dtype=float)
    b = np.asarray(arr2, dtype=float)
    if a.shape != b.shape:
        raise ValueError(
            f"arr1 and arr2 must have the same length; got {a.shape} and {b.shape}"
        )
    pairing = monotone_pairing(a, b)
    return b[pairing.partner]


__all__ = ["Pairing", "monotone_pairing", "reorder_min_diff"]
