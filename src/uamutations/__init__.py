"""uamutations public package surface."""
from __future__ import annotations

from importlib import import_module

from .aggregate import aggregate_to_groups
from .calculate_dists import calculate_dists, match_distributions
from .mlr import adj_for_beta, mlr_beta, standardise_arrays
from .ranking import OrderingIndex, get_ordering_index
from .strategies import MatchStrategy, get_strategy

__version__ = "0.1.0"

__all__ = sorted(
    [
        "__version__",
        OrderingIndex.__name__,
        MatchStrategy.__name__,
        adj_for_beta.__name__,
        aggregate_to_groups.__name__,
        calculate_dists.__name__,
        get_ordering_index.__name__,
        get_strategy.__name__,
        match_distributions.__name__,
        mlr_beta.__name__,
        standardise_arrays.__name__,
        "uamutate",
    ]
)


def __getattr__(name: str):  # pragma: no cover - thin lazy import helper
    if name == "uamutate":
        from .pipeline import uamutate as _uamutate

        globals()[name] = _uamutate
        return _uamutate
    if name == "pipeline":
        module = import_module("uamutations.pipeline")
        globals()[name] = module
        return module
    raise AttributeError(f"module 'uamutations' has no attribute '{name}'")
