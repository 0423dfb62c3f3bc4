from __future__ import annotations

import numpy as np
import pytest

import uamutations.pipeline as pipeline
from uamutations.calculate_dists import match_distributions
from uamutations.config import MutationConfig
from uamutations.io import read_output, readfile
from uamutations.pipeline import compute_mutations, uamutate
from uamutations.validations import PreflightError


def test_uamutate_per_observation(dat1, dat2, tmp_path):
    out = tmp_path / "obs.txt"
    result = uamutate(dat1, dat2, "bike_index", nentries=10, outfilename=out, group_field=None)

    v1, _ = readfile(dat1, ["bike_index"], 10)
    v2, _ = readfile(dat2, ["bike_index"], 10)
    expected = match_distributions(1.0 - v1[0], 1.0 - v2[0], relative=True)
    assert result.shape == (10,)
    assert result == pytest.approx(expected)

    header, rows = read_output(out)
    assert "mutation" in header
    assert rows.shape == (10, 5)
    assert rows[:, 4] == pytest.approx(expected)


@pytest.mark.parametrize("varextra", [None, ["social_index"]])
def test_observation_table_rows_are_consistent(dat1, dat2, tmp_path, varextra):
    out = tmp_path / "obs.txt"
    uamutate(dat1, dat2, "bike_index", varextra, nentries=10, outfilename=out, group_field=None)

    _, rows = read_output(out)
    value, matched, diff_abs, mutation = rows[:, 1], rows[:, 2], rows[:, 3], rows[:, 4]
    assert value + diff_abs == pytest.approx(matched)
    assert diff_abs / value == pytest.approx(mutation)


def test_uamutate_grouped(dat1, dat2, tmp_path):
    out = tmp_path / "groups.txt"
    result = uamutate(dat1, dat2, "bike_index", ["social_index"], nentries=10, outfilename=out)

    assert result.shape == (3,)
    header, rows = read_output(out)
    assert header == ["group", "mutation"]
    assert rows[:, 0].tolist() == [1.0, 2.0, 3.0]
    assert rows[:, 1] == pytest.approx(result)


def test_uamutate_absolute_without_transform(dat1, dat2, tmp_path):
    result = uamutate(
        dat1,
        dat2,
        "bike_index",
        nentries=10,
        outfilename=tmp_path / "obs.txt",
        group_field=None,
        relative=False,
        apply_transforms=False,
    )
    # every target value is above its paired source value in the fixture
    assert np.all(result > 0)
    assert result.sum() == pytest.approx(
        np.sort(readfile(dat2, ["bike_index"], 10)[0][0]).sum()
        - np.sort(readfile(dat1, ["bike_index"], 10)[0][0]).sum()
    )


def test_auxiliary_rows_reach_matching_unchanged(dat1, dat2, monkeypatch):
    seen = {}
    original = pipeline.match_populations

    def capture(values1, values2, strategy=None):
        seen["values1"] = values1.copy()
        return original(values1, values2, strategy)

    monkeypatch.setattr(pipeline, "match_populations", capture)

    variables = ["bike_index", "social_index"]
    v1, groups = readfile(dat1, variables, 10, group_field="index")
    v2, _ = readfile(dat2, variables, 10)
    config = MutationConfig("bike_index", ("social_index",), nentries=10)
    compute_mutations(v1, v2, config, groups1=groups)

    assert np.array_equal(seen["values1"][1], v1[1])
    assert not np.allclose(seen["values1"][0], 1.0 - v1[0])


def test_compute_mutations_does_not_modify_inputs(dat1, dat2):
    v1, groups = readfile(dat1, ["bike_index"], 10, group_field="index")
    v2, _ = readfile(dat2, ["bike_index"], 10)
    before1, before2 = v1.copy(), v2.copy()
    result = compute_mutations(v1, v2, MutationConfig("bike_index"), groups1=groups)

    assert np.array_equal(v1, before1)
    assert np.array_equal(v2, before2)
    assert result.output is result.group_means


def test_grouped_output_needs_groups(dat1, dat2):
    v1, _ = readfile(dat1, ["bike_index"], 10)
    v2, _ = readfile(dat2, ["bike_index"], 10)
    with pytest.raises(PreflightError, match="Group ids"):
        compute_mutations(v1, v2, MutationConfig("bike_index"))


def test_observation_count_mismatch(dat1, dat2):
    v1, _ = readfile(dat1, ["bike_index"], 10)
    v2, _ = readfile(dat2, ["bike_index"], 8)
    with pytest.raises(PreflightError, match="same number of observations"):
        compute_mutations(v1, v2, MutationConfig("bike_index", group_field=None))


def test_variable_count_mismatch(dat1, dat2):
    v1, _ = readfile(dat1, ["bike_index"], 10)
    v2, _ = readfile(dat2, ["bike_index"], 10)
    config = MutationConfig("bike_index", ("social_index",), group_field=None)
    with pytest.raises(PreflightError, match="Expected 2 variable rows"):
        compute_mutations(v1, v2, config)


def test_missing_input_file(dat1, tmp_path):
    with pytest.raises(PreflightError, match="Missing input files"):
        uamutate(dat1, tmp_path / "absent.json", "bike_index", outfilename=tmp_path / "o.txt")
    assert not (tmp_path / "o.txt").exists()
