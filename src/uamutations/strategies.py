"""Named strategies for pairing the observations of two populations.

Every strategy answers the same question: for each observation (column) of
``values1``, which observation of ``values2`` does it correspond to? Results
are returned as an index array aligned with the original column order of
``values1``, and are always a permutation of ``range(n)``.

``monotone``
    Global minimum-cost order-preserving pairing on the primary variable
    (row 0) only. This is the default.
``greedy``
    Nearest unclaimed neighbour in the full variable space, found by brute
    force. Observations of ``values1`` are visited from the lowest primary
    value upwards so each greedy choice starts from the edge of the
    distribution. Not globally optimal.
``kdtree``
    Same visiting order and result semantics as ``greedy``, including ties
    going to the lowest target index, with neighbours found through a
    :class:`scipy.spatial.cKDTree`.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Type

import numpy as np

from .assignment import monotone_pairing
from .progress_utils import MatchProgressReporter
from .ranking import get_ordering_index
from .validations import require_finite

logger = logging.getLogger(__name__)


def _check_matrices(values1: np.ndarray, values2: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    v1 = np.asarray(values1, dtype=float)
    v2 = np.asarray(values2, dtype=float)
    if v1.ndim != 2 or v2.ndim != 2:
        raise ValueError(
            "values1 and values2 must be 2-D (variables, observations); "
            f"received shapes {v1.shape} and {v2.shape}"
        )
    if v1.size == 0:
        raise ValueError("values1 must not be empty")
    if v1.shape != v2.shape:
        raise ValueError(
            f"values1 and values2 must have the same dimensions; got {v1.shape} and {v2.shape}"
        )
    return v1, v2


class MatchStrategy(ABC):
    """Interface shared by all pairing strategies."""

    name: str = ""

    def match(self, values1: np.ndarray, values2: np.ndarray) -> np.ndarray:
        """Return, for each column of ``values1``, the paired column of ``values2``."""

        v1, v2 = _check_matrices(values1, values2)
        assignment = self._match(v1, v2)
        logger.debug("%s strategy paired %d observations", self.name, assignment.shape[0])
        return assignment

    @abstractmethod
    def _match(self, values1: np.ndarray, values2: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class MonotoneMatch(MatchStrategy):
    name = "monotone"

    def _match(self, values1: np.ndarray, values2: np.ndarray) -> np.ndarray:
        order1 = get_ordering_index(values1[0])
        order2 = get_ordering_index(values2[0])

        sorted1 = order1.apply(values1[0])
        sorted2 = order2.apply(values2[0])
        pairing = monotone_pairing(sorted1, sorted2)

        ranked_targets = order2.index_sort[pairing.partner]
        return order1.restore(ranked_targets)


class GreedyNearestMatch(MatchStrategy):
    name = "greedy"

    def _match(self, values1: np.ndarray, values2: np.ndarray) -> np.ndarray:
        require_finite(values2, "values2")
        order = get_ordering_index(values1[0])
        points1 = values1.T
        points2 = values2.T
        n = points1.shape[0]

        claimed = np.zeros(n, dtype=bool)
        assignment = np.empty(n, dtype=np.int64)

        with MatchProgressReporter("greedy matching", n) as progress:
            for idx in order.index_sort:
                dist = np.sum((points2 - points1[idx]) ** 2, axis=1)
                dist[claimed] = np.inf
                nearest = int(np.argmin(dist))
                claimed[nearest] = True
                assignment[idx] = nearest
                progress.update()

        return assignment


class KDTreeNearestMatch(MatchStrategy):
    name = "kdtree"

    def __init__(self, initial_k: int = 8) -> None:
        if initial_k < 1:
            raise ValueError("initial_k must be at least 1")
        self.initial_k = initial_k

    def _match(self, values1: np.ndarray, values2: np.ndarray) -> np.ndarray:
        from scipy.spatial import cKDTree

        require_finite(values1, "values1")
        require_finite(values2, "values2")
        order = get_ordering_index(values1[0])
        points1 = values1.T
        tree = cKDTree(values2.T)
        n = points1.shape[0]

        claimed = np.zeros(n, dtype=bool)
        assignment = np.empty(n, dtype=np.int64)

        with MatchProgressReporter("k-d tree matching", n) as progress:
            for idx in order.index_sort:
                k = min(self.initial_k, n)
                while True:
                    dists, neighbours = tree.query(points1[idx], k=k)
                    dists = np.atleast_1d(dists)
                    candidates = np.atleast_1d(neighbours)
                    free = ~claimed[candidates]
                    if free.any():
                        best = dists[free].min()
                        # a tie at the last neighbour may continue past k
                        if k == n or dists[-1] > best:
                            nearest = int(candidates[free & (dists == best)].min())
                            break
                    elif k == n:  # pragma: no cover - an unclaimed point always remains
                        raise RuntimeError("k-d tree search exhausted all observations")
                    k = min(2 * k, n)
                claimed[nearest] = True
                assignment[idx] = nearest
                progress.update()

        return assignment

    def __repr__(self) -> str:
        return f"{type(self).__name__}(initial_k={self.initial_k})"


STRATEGIES: Dict[str, Type[MatchStrategy]] = {
    MonotoneMatch.name: MonotoneMatch,
    GreedyNearestMatch.name: GreedyNearestMatch,
    KDTreeNearestMatch.name: KDTreeNearestMatch,
}

DEFAULT_STRATEGY = MonotoneMatch.name


def get_strategy(strategy: str | MatchStrategy | None = None) -> MatchStrategy:
    """Resolve a strategy name (or pass an instance straight through)."""

    if isinstance(strategy, MatchStrategy):
        return strategy
    name = (strategy or DEFAULT_STRATEGY).strip().lower()
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown match strategy {strategy!r}; expected one of {sorted(STRATEGIES)}"
        ) from None


__all__ = [
    "DEFAULT_STRATEGY",
    "GreedyNearestMatch",
    "KDTreeNearestMatch",
    "MatchStrategy",
    "MonotoneMatch",
    "STRATEGIES",
    "get_strategy",
]
