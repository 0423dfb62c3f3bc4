"""Group-wise reduction of per-observation mutation signals."""
from __future__ import annotations

from typing import Sequence

import numpy as np


def aggregate_to_groups(
    dists: Sequence[float] | np.ndarray,
    groups: Sequence[int] | np.ndarray,
) -> np.ndarray:
    """Mean of ``dists`` within each group.

    Parameters
    ----------
    dists
        Per-observation signal.
    groups
        1-based group id for each observation. The largest id sets the output
        length; ids that never occur produce ``0.0``.

    Returns
    -------
    np.ndarray
        ``out[g - 1]`` is the mean signal of group ``g``.

    Examples
    --------
    >>> aggregate_to_groups([4, 12, 6, 5], [1, 1, 2, 2]).tolist()
    [8.0, 5.5]
    """

    values = np.asarray(dists, dtype=float)
    group_ids = np.asarray(groups)
    if values.ndim != 1 or group_ids.ndim != 1:
        raise ValueError("dists and groups must be one-dimensional")
    if values.size == 0:
        raise ValueError("dists must not be empty")
    if values.shape != group_ids.shape:
        raise ValueError(
            f"dists and groups must have the same length; got {values.size} and {group_ids.size}"
        )
    if not np.issubdtype(group_ids.dtype, np.integer):
        if not np.all(np.mod(group_ids, 1) == 0):
            raise ValueError("group ids must be integers")
        group_ids = group_ids.astype(np.int64)
    if group_ids.min() < 1:
        raise ValueError(f"group ids must be positive (1-based); found {int(group_ids.min())}")

    n_groups = int(group_ids.max())
    sums = np.bincount(group_ids, weights=values, minlength=n_groups + 1)
    counts = np.bincount(group_ids, minlength=n_groups + 1)

    means = np.divide(sums, counts, out=np.zeros_like(sums), where=counts > 0)
    # slot 0 is unused because ids are 1-based
    return means[1:]


__all__ = ["aggregate_to_groups"]
