from __future__ import annotations

import pytest

from uamutations.config import MutationConfig, resolve_nentries
from uamutations.validations import PreflightError


def test_defaults():
    config = MutationConfig("bike_index")
    assert config.max_entries == 1000
    assert config.variables == ["bike_index"]
    assert config.grouped
    assert config.group_field == "index"
    assert config.strategy == "monotone"
    assert config.relative


def test_nentries_from_environment(monkeypatch):
    monkeypatch.setenv("UAM_NENTRIES", "25")
    assert resolve_nentries(None) == 25
    assert MutationConfig("bike_index").max_entries == 25
    assert MutationConfig("bike_index", nentries=5).max_entries == 5


def test_invalid_environment_value(monkeypatch):
    monkeypatch.setenv("UAM_NENTRIES", "lots")
    with pytest.raises(PreflightError, match="UAM_NENTRIES"):
        resolve_nentries(None)


def test_from_values_accepts_lists():
    config = MutationConfig.from_values("bike_index", ["social_index", "transport"])
    assert config.varextra == ("social_index", "transport")
    assert config.variables == ["bike_index", "social_index", "transport"]


def test_per_observation_config():
    assert not MutationConfig("bike_index", group_field=None).grouped


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"varname": ""}, "non-empty"),
        ({"varname": "bike_index", "varextra": ("bike_index",)}, "auxiliary"),
        ({"varname": "bike_index", "group_field": "bike_index"}, "group field"),
        ({"varname": "bike_index", "group_field": ""}, "group_field"),
        ({"varname": "bike_index", "group_field": "  "}, "group_field"),
        ({"varname": "bike_index", "nentries": 0}, "greater than zero"),
        ({"varname": "bike_index", "strategy": "hungarian"}, "Unknown match strategy"),
    ],
)
def test_invalid_configs(kwargs, message):
    with pytest.raises(PreflightError, match=message):
        MutationConfig(**kwargs)
