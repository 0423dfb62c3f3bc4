from __future__ import annotations

import numpy as np
import pytest

from uamutations.transform import load_variable_transforms, transform_values


def test_packaged_table_reverses_bike_index():
    transforms = load_variable_transforms()
    assert transforms["bike_index"] == pytest.approx(1.0)


def test_listed_variable_is_reversed_on_the_primary_row_only():
    values = np.array([[0.2, 0.75], [3.0, 4.0]])
    out = transform_values(values, "bike_index", {"bike_index": 1.0})
    assert out[0] == pytest.approx([0.8, 0.25])
    assert np.array_equal(out[1], values[1])
    assert values[0].tolist() == [0.2, 0.75]


def test_one_dimensional_values_are_reversed():
    out = transform_values([0.1, 0.6], "bike_index")
    assert out == pytest.approx([0.9, 0.4])


def test_unlisted_variable_returns_copy():
    values = np.array([[1.0, 2.0]])
    out = transform_values(values, "transport", {"bike_index": 1.0})
    assert np.array_equal(out, values)
    assert out is not values


def test_empty_values_rejected():
    with pytest.raises(ValueError):
        transform_values(np.array([]), "bike_index")


def test_missing_table_raises():
    with pytest.raises(FileNotFoundError):
        load_variable_transforms("no_such_table")
