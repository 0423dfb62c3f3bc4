"""Per-observation mutation distances between two populations."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .strategies import MatchStrategy, get_strategy
from .validations import require_nonzero


@dataclass(frozen=True)
class MatchResult:
    """Paired primary values for every observation of the source population.

    Attributes
    ----------
    assignment
        ``assignment[i]`` is the target observation paired with source ``i``.
    source
        Source primary values in original order.
    matched
        Target primary values paired with ``source``.
    """

    assignment: np.ndarray
    source: np.ndarray
    matched: np.ndarray

    @property
    def diffs_abs(self) -> np.ndarray:
        return self.matched - self.source

    @property
    def diffs_rel(self) -> np.ndarray:
        require_nonzero(self.source, "source values")
        return (self.matched - self.source) / self.source

    def differences(self, relative: bool) -> np.ndarray:
        return self.diffs_rel if relative else self.diffs_abs


def match_populations(
    values1: np.ndarray,
    values2: np.ndarray,
    strategy: str | MatchStrategy | None = None,
) -> MatchResult:
    """Pair ``values1`` with ``values2`` using ``strategy`` (default ``monotone``)."""

    matcher = get_strategy(strategy)
    v1 = np.asarray(values1, dtype=float)
    v2 = np.asarray(values2, dtype=float)
    assignment = matcher.match(v1, v2)
    return MatchResult(
        assignment=assignment,
        source=v1[0].copy(),
        matched=v2[0, assignment],
    )


def calculate_dists(
    values1: np.ndarray,
    values2: np.ndarray,
    relative: bool = False,
    strategy: str | MatchStrategy | None = None,
) -> np.ndarray:
    """Distances by which each primary value of ``values1`` should move.

    Parameters
    ----------
    values1
        ``(variables, observations)`` array of the population to be mutated.
    values2
        Array of the same shape describing the target population.
    relative
        Divide each difference by the source value.
    strategy
        Pairing strategy name or instance, see :mod:`uamutations.strategies`.

    Returns
    -------
    np.ndarray
        ``matched - source`` (or ``(matched - source) / source``) per
        observation, in the original column order of ``values1``.

    Examples
    --------
    >>> calculate_dists([[1.0, 2.0, 4.0, 5.0]], [[7.0, 9.0, 3.0, 2.0]]).tolist()
    [1.0, 1.0, 3.0, 4.0]
    """

    return match_populations(values1, values2, strategy).differences(relative)


def match_distributions(
    values1: Sequence[float] | np.ndarray,
    values2: Sequence[float] | np.ndarray,
    relative: bool = False,
) -> np.ndarray:
    """Single-variable form of :func:`calculate_dists` using the monotone pairing."""

    v1 = np.asarray(values1, dtype=float)
    v2 = np.asarray(values2, dtype=float)
    if v1.ndim != 1 or v2.ndim != 1:
        raise ValueError(
            f"values1 and values2 must be one-dimensional; got {v1.shape} and {v2.shape}"
        )
    if v1.size == 0:
        raise ValueError("values1 must not be empty")
    if v1.shape != v2.shape:
        raise ValueError(
            f"values1 and values2 must have the same length; got {v1.size} and {v2.size}"
        )
    return calculate_dists(v1[np.newaxis, :], v2[np.newaxis, :], relative, "monotone")


__all__ = ["MatchResult", "calculate_dists", "match_distributions", "match_populations"]
