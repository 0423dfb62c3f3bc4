from __future__ import annotations

import json
import logging
from typing import Dict

import importlib.resources as resources

import numpy as np

logger = logging.getLogger(__name__)


def load_variable_transforms(table: str = "transforms") -> Dict[str, float]:
    """Load the table of variables that are reversed before matching.

    Parameters
    ----------
    table : str
        Name of the packaged JSON table (without extension).

    Returns
    -------
    dict[str, float]
        Mapping from variable name to the value each observation is
        subtracted from.

    Notes
    -----
    - Reversal makes "higher is better" hold for every mutated variable.
    """
    filename = f"{table}.json"
    with resources.files("uamutations.data").joinpath(filename).open(
        "r", encoding="utf-8"
    ) as f:
        cfg = json.load(f)

    variables = cfg.get("variables", {})
    return {str(k): float(v["reverse_from"]) for k, v in variables.items()}


def transform_values(
    values: np.ndarray,
    varname: str,
    transforms: Dict[str, float] | None = None,
) -> np.ndarray:
    """Return a copy of ``values`` with row 0 transformed for ``varname``.

    Variables without an entry in ``transforms`` are returned unchanged.
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise ValueError("values must not be empty")

    if transforms is None:
        transforms = load_variable_transforms()

    result = arr.copy()
    reverse_from = transforms.get(varname)
    if reverse_from is None:
        return result

    logger.info("🔁 Reversing %s as %s - x", varname, reverse_from)
    if result.ndim == 1:
        result = reverse_from - result
    else:
        result[0] = reverse_from - result[0]
    return result


__all__ = ["load_variable_transforms", "transform_values"]
