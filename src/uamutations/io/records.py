"""Readers turning record files into ``(variables, observations)`` matrices."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

import numpy as np
import pandas as pd

from .._optional import require_geopandas
from ..validations import PreflightError, require_fields, require_record_limit

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".geojson", ".parquet")


def _load_json_records(path: Path, fields: Sequence[str], nentries: int) -> pd.DataFrame:
    with path.open("r", encoding="utf-8") as fp:
        try:
            payload = json.load(fp)
        except json.JSONDecodeError as exc:
            raise PreflightError(f"{path}: not valid JSON ({exc})") from exc

    if isinstance(payload, dict) and payload.get("type") == "FeatureCollection":
        items = [feature.get("properties") or {} for feature in payload.get("features", [])]
    elif isinstance(payload, list):
        items = payload
    else:
        raise PreflightError(f"{path}: expected a JSON array of records")

    records: list[dict[str, Any]] = []
    for position, item in enumerate(items[:nentries]):
        if not isinstance(item, dict):
            raise PreflightError(f"{path}: record {position} is not a JSON object")
        require_fields(item, fields, source=str(path), position=position)
        records.append({name: item[name] for name in fields})

    return pd.DataFrame.from_records(records, columns=list(fields))


def _load_geojson_records(path: Path, fields: Sequence[str], nentries: int) -> pd.DataFrame:
    gpd = require_geopandas()
    frame = gpd.read_file(path, rows=nentries)
    return pd.DataFrame(frame.drop(columns=frame.geometry.name))


def _load_parquet_records(path: Path, fields: Sequence[str], nentries: int) -> pd.DataFrame:
    columns = set(_parquet_columns(path))
    missing = [name for name in fields if name not in columns]
    if missing:
        raise PreflightError(f"{path}: missing field(s) {', '.join(missing)}")
    return pd.read_parquet(path, columns=list(fields)).head(nentries)


def _parquet_columns(path: Path) -> list[str]:
    import pyarrow.parquet as pq

    return list(pq.read_schema(path).names)


def _check_frame(frame: pd.DataFrame, fields: Sequence[str], source: str) -> None:
    missing = [name for name in fields if name not in frame.columns]
    if missing:
        raise PreflightError(f"{source}: missing field(s) {', '.join(missing)}")
    for name in fields:
        absent = frame[name].isna().to_numpy()
        if absent.any():
            position = int(np.flatnonzero(absent)[0])
            raise PreflightError(f"{source}: record {position} is missing field(s) {name}")


def _numeric_column(frame: pd.DataFrame, name: str, source: str) -> np.ndarray:
    try:
        return pd.to_numeric(frame[name], errors="raise").to_numpy(dtype=float)
    except (TypeError, ValueError) as exc:
        raise PreflightError(f"{source}: field {name!r} holds non-numeric values ({exc})") from exc


def _group_column(frame: pd.DataFrame, name: str, source: str) -> np.ndarray:
    ids = _numeric_column(frame, name, source)
    if not np.all(np.mod(ids, 1) == 0):
        raise PreflightError(f"{source}: group field {name!r} must hold integers")
    if ids.size and ids.min() < 1:
        raise PreflightError(
            f"{source}: group field {name!r} must hold positive 1-based ids "
            f"(found {int(ids.min())})"
        )
    return ids.astype(np.int64)


def read_records(path: Path | str, fields: Sequence[str], nentries: int) -> pd.DataFrame:
    """Read at most ``nentries`` records holding ``fields`` from ``path``."""

    require_record_limit(nentries)
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    suffix = path.suffix.lower()
    if suffix == ".json":
        frame = _load_json_records(path, fields, nentries)
    elif suffix == ".geojson":
        frame = _load_geojson_records(path, fields, nentries)
    elif suffix == ".parquet":
        frame = _load_parquet_records(path, fields, nentries)
    else:
        raise PreflightError(
            f"{path}: unsupported file type {suffix!r}; expected one of {SUPPORTED_SUFFIXES}"
        )

    frame = frame.head(nentries).reset_index(drop=True)
    _check_frame(frame, fields, str(path))
    if frame.empty:
        raise PreflightError(f"{path}: no records found")
    return frame


def readfile(
    filename: Path | str,
    varnames: Sequence[str],
    nentries: int,
    group_field: Optional[str] = None,
) -> tuple[np.ndarray, Optional[np.ndarray]]:
    """Read variables (and optionally group ids) from a record file.

    Parameters
    ----------
    filename
        ``.json`` array of objects, ``.geojson`` feature collection or
        ``.parquet`` table.
    varnames
        Primary variable first, followed by any auxiliary variables.
    nentries
        Maximum number of records to read.
    group_field
        Field holding 1-based group ids, or ``None``.

    Returns
    -------
    tuple
        ``values`` with shape ``(len(varnames), n)`` and ``groups`` with shape
        ``(n,)`` (``None`` when ``group_field`` is ``None``).
    """

    if not varnames:
        raise PreflightError("At least one variable name is required")
    fields = list(varnames) + ([group_field] if group_field else [])
    frame = read_records(filename, fields, nentries)
    source = str(filename)

    values = np.vstack([_numeric_column(frame, name, source) for name in varnames])
    groups = _group_column(frame, group_field, source) if group_field else None

    logger.info(
        "📥 Read %d records x %d variables from %s",
        values.shape[1],
        values.shape[0],
        Path(filename).name,
    )
    return values, groups


__all__ = ["SUPPORTED_SUFFIXES", "read_records", "readfile"]
