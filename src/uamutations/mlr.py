"""Regression adjustment of the primary variable against auxiliary variables.

All arrays are ``(variables, observations)`` with the primary variable in row 0.
"""
from __future__ import annotations

import logging

import numpy as np

from .validations import NumericalError, require_finite, require_nonzero_variance

logger = logging.getLogger(__name__)


def _as_matrix(values: np.ndarray, label: str) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 2:
        raise ValueError(
            f"{label} must be a 2-D (variables, observations) array; received shape {arr.shape}"
        )
    if arr.size == 0:
        raise ValueError(f"{label} must not be empty")
    return arr


def standardise_arrays(
    values1: np.ndarray, values2: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    """Standardise two arrays to a mutual scale for each variable.

    Each row is shifted and scaled by the mean and population standard
    deviation of that variable pooled over the observations of both arrays, so
    the pooled row has mean 0 and standard deviation 1 while the relationship
    between the two arrays is preserved.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        Standardised copies of ``values1`` and ``values2``.

    Raises
    ------
    NumericalError
        If any pooled variable has zero variance.
    """

    v1 = _as_matrix(values1, "values1")
    v2 = _as_matrix(values2, "values2")
    if v1.shape[0] != v2.shape[0]:
        raise ValueError(
            f"values1 and values2 must have the same variables; got {v1.shape[0]} and {v2.shape[0]} rows"
        )
    require_finite(v1, "values1")
    require_finite(v2, "values2")

    pooled = np.concatenate([v1, v2], axis=1)
    mean_vals = pooled.mean(axis=1)
    std_devs = pooled.std(axis=1)
    require_nonzero_variance(std_devs, "standardise_arrays")

    out1 = (v1 - mean_vals[:, None]) / std_devs[:, None]
    out2 = (v2 - mean_vals[:, None]) / std_devs[:, None]
    return out1, out2


def mlr_beta(data: np.ndarray) -> np.ndarray:
    """Slopes of a multiple linear regression of row 0 on all other rows.

    The regression has no intercept and is solved with
    :func:`numpy.linalg.lstsq`.

    Parameters
    ----------
    data
        ``(variables, observations)`` array with at least two rows.

    Returns
    -------
    np.ndarray
        One coefficient per independent variable (``data.shape[0] - 1``).
    """

    arr = _as_matrix(data, "data")
    if arr.shape[0] < 2:
        raise ValueError(
            "data must contain the dependent variable and at least one independent variable"
        )
    require_finite(arr, "data")

    design = arr[1:].T
    target = arr[0]
    coeffs, _, rank, _ = np.linalg.lstsq(design, target, rcond=None)
    if rank < design.shape[1]:
        raise NumericalError(
            f"Regression design is rank deficient (rank {rank} for {design.shape[1]} variables); "
            "auxiliary variables must be linearly independent"
        )
    return coeffs


def adj_for_beta(values1: np.ndarray, values2: np.ndarray) -> np.ndarray:
    """Replace the auxiliary dependence of ``values1[0]`` with that of ``values2``.

    Both arrays are standardised together, regression coefficients ``beta1``
    and ``beta2`` are fitted on each, and the primary row of ``values1`` becomes
    ``sum_k values1[k] * (1 + beta2[k - 1] - beta1[k - 1])`` over the auxiliary
    rows ``k``. Auxiliary rows are returned unchanged and the inputs are not
    modified.
    """

    v1 = _as_matrix(values1, "values1")
    v2 = _as_matrix(values2, "values2")
    if v1.shape != v2.shape:
        raise ValueError(
            f"values1 and values2 must have the same dimensions; got {v1.shape} and {v2.shape}"
        )

    std1, std2 = standardise_arrays(v1, v2)
    beta1 = mlr_beta(std1)
    beta2 = mlr_beta(std2)
    logger.debug("beta1=%s beta2=%s", beta1, beta2)

    weights = 1.0 + beta2 - beta1
    adjusted = v1.copy()
    adjusted[0] = (v1[1:] * weights[:, None]).sum(axis=0)
    return adjusted


__all__ = ["adj_for_beta", "mlr_beta", "standardise_arrays"]
