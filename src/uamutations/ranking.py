"""Stable rank permutations of numeric sequences."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .validations import require_finite


@dataclass(frozen=True)
class OrderingIndex:
    """A sort permutation and its inverse.

    ``index_sort[i]`` is the original position of the ``i``-th ranked value and
    ``index_reorder[j]`` is the rank of original position ``j``, so
    ``sorted_values[index_reorder]`` restores the original order.
    """

    index_sort: np.ndarray
    index_reorder: np.ndarray

    def __len__(self) -> int:
        return int(self.index_sort.shape[0])

    def apply(self, values: Sequence[float] | np.ndarray) -> np.ndarray:
        return np.asarray(values)[self.index_sort]

    def restore(self, ranked: Sequence[float] | np.ndarray) -> np.ndarray:
        return np.asarray(ranked)[self.index_reorder]


def get_ordering_index(
    vals: Sequence[float] | np.ndarray,
    desc: bool = False,
    is_abs: bool = False,
) -> OrderingIndex:
    """Return the stable ordering of ``vals``.

    Parameters
    ----------
    vals
        Non-empty one-dimensional numeric sequence.
    desc
        Rank largest first instead of smallest first.
    is_abs
        Rank by magnitude rather than signed value.

    Ties keep their original relative order in both directions.

    Examples
    --------
    >>> get_ordering_index([1.0, -2.0, 3.0, -4.0, 5.0]).index_sort.tolist()
    [3, 1, 0, 2, 4]
    """

    arr = np.asarray(vals, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"vals must be one-dimensional; received shape {arr.shape}")
    if arr.size == 0:
        raise ValueError("vals must not be empty")
    require_finite(arr, "ranking input")

    keys = np.abs(arr) if is_abs else arr
    if desc:
        keys = -keys
    index_sort = np.argsort(keys, kind="stable")

    index_reorder = np.empty_like(index_sort)
    index_reorder[index_sort] = np.arange(index_sort.shape[0])

    return OrderingIndex(index_sort=index_sort, index_reorder=index_reorder)


__all__ = ["OrderingIndex", "get_ordering_index"]
