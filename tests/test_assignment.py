from __future__ import annotations

from itertools import combinations

import numpy as np
import pytest

from uamutations.assignment import monotone_pairing, reorder_min_diff
from uamutations.calculate_dists import calculate_dists, match_distributions


def _brute_force_cost(a: np.ndarray, b: np.ndarray) -> float:
    """Cheapest non-crossing pairing of min(len(a), len(b)) elements."""

    if len(a) <= len(b):
        return min(
            float(np.abs(a - b[list(chosen)]).sum())
            for chosen in combinations(range(len(b)), len(a))
        )
    return _brute_force_cost(b, a)


def test_calculate_dists_absolute():
    # 2.0 is closest to 2.0 but is matched to 3.0 because matching is sequential and unique
    values1 = np.array([[1.0, 2.0, 4.0, 5.0]])
    values2 = np.array([[7.0, 9.0, 3.0, 2.0]])
    assert calculate_dists(values1, values2, relative=False).tolist() == [1.0, 1.0, 3.0, 4.0]


def test_calculate_dists_relative():
    values1 = np.array([[1.0, 2.0, 4.0, 5.0]])
    values2 = np.array([[7.0, 9.0, 3.0, 2.0]])
    result = calculate_dists(values1, values2, relative=True)
    assert result == pytest.approx([1.0, 0.5, 0.75, 0.8])


def test_match_distributions_keeps_original_order():
    values1 = [5.0, 1.0, 4.0, 2.0]
    values2 = [7.0, 9.0, 3.0, 2.0]
    assert match_distributions(values1, values2).tolist() == [4.0, 1.0, 3.0, 1.0]


def test_match_distributions_rejects_bad_input():
    with pytest.raises(ValueError, match="same length"):
        match_distributions([1.0, 2.0], [1.0, 2.0, 3.0])
    with pytest.raises(ValueError, match="must not be empty"):
        match_distributions([], [])


def test_relative_rejects_zero_source():
    from uamutations.validations import NumericalError

    with pytest.raises(NumericalError):
        match_distributions([0.0, 1.0], [1.0, 2.0], relative=True)


def test_square_pairing_is_identity_on_sorted_inputs():
    a = np.array([1.0, 2.0, 4.0, 5.0])
    b = np.array([2.0, 3.0, 7.0, 9.0])
    pairing = monotone_pairing(a, b)
    assert pairing.partner.tolist() == [0, 1, 2, 3]
    assert pairing.cost == pytest.approx(9.0)
    assert reorder_min_diff(a, b).tolist() == [2.0, 3.0, 7.0, 9.0]


@pytest.mark.parametrize("n,m", [(3, 6), (4, 4), (6, 3), (1, 5), (5, 1)])
def test_pairing_is_optimal_among_monotone_pairings(n, m):
    rng = np.random.default_rng(n * 10 + m)
    a = np.sort(rng.normal(size=n))
    b = np.sort(rng.normal(size=m))

    pairing = monotone_pairing(a, b)
    paired = pairing.partner[pairing.partner >= 0]

    assert paired.size == min(n, m)
    assert np.all(np.diff(paired) > 0)
    realised = float(np.abs(a[pairing.partner >= 0] - b[paired]).sum())
    assert realised == pytest.approx(pairing.cost)
    assert pairing.cost == pytest.approx(_brute_force_cost(a, b))


def test_pairing_skips_outliers_when_target_is_longer():
    a = np.array([1.0, 2.0])
    b = np.array([-100.0, 1.0, 2.0, 100.0])
    pairing = monotone_pairing(a, b)
    assert pairing.partner.tolist() == [1, 2]
    assert pairing.cost == pytest.approx(0.0)


def test_pairing_requires_sorted_input():
    with pytest.raises(ValueError, match="ascending"):
        monotone_pairing([2.0, 1.0], [1.0, 2.0])
