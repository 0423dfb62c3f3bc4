"""Comma-and-space delimited text output for mutation results.

Numbers are written with Python's shortest round-tripping float repr so the
files parse back to identical values.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)

SEPARATOR = ", "
GROUP_HEADER = ("group", "mutation")
OBSERVATION_HEADER = ("index", "value", "matched", "diff_abs", "mutation")


def _format_value(value: object) -> str:
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    return repr(float(value))


def _write_rows(path: Path, header: Sequence[str], columns: Sequence[np.ndarray]) -> Path:
    path = Path(path)
    lengths = {len(col) for col in columns}
    if len(lengths) != 1:
        raise ValueError("All output columns must have the same length")

    lines = [SEPARATOR.join(header)]
    for row in zip(*columns):
        lines.append(SEPARATOR.join(_format_value(v) for v in row))

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    logger.info("💾 Wrote %d rows → %s", len(lines) - 1, path)
    return path


def write_group_means(means: Sequence[float] | np.ndarray, filename: Path | str) -> Path:
    """Write one ``group, mutation`` line per 1-based group id."""

    values = np.asarray(means, dtype=float)
    groups = np.arange(1, values.shape[0] + 1)
    return _write_rows(Path(filename), GROUP_HEADER, [groups, values])


def write_observations(
    filename: Path | str,
    values: Sequence[float] | np.ndarray,
    matched: Sequence[float] | np.ndarray,
    diffs_abs: Sequence[float] | np.ndarray,
    mutation: Sequence[float] | np.ndarray,
) -> Path:
    """Write one line per observation in original input order.

    ``values`` are the source values as they were matched, so every row
    satisfies ``value + diff_abs == matched``.
    """

    columns = [
        np.arange(len(values)),
        np.asarray(values, dtype=float),
        np.asarray(matched, dtype=float),
        np.asarray(diffs_abs, dtype=float),
        np.asarray(mutation, dtype=float),
    ]
    return _write_rows(Path(filename), OBSERVATION_HEADER, columns)


def read_output(filename: Path | str) -> tuple[list[str], np.ndarray]:
    """Parse a file written by this module back into ``(header, values)``."""

    lines = Path(filename).read_text(encoding="utf-8").splitlines()
    if not lines:
        raise ValueError(f"{filename} is empty")
    header = [token.strip() for token in lines[0].split(SEPARATOR.strip())]
    rows = [[float(token) for token in line.split(SEPARATOR.strip())] for line in lines[1:] if line]
    return header, np.asarray(rows, dtype=float).reshape(len(rows), len(header))


__all__ = [
    "GROUP_HEADER",
    "OBSERVATION_HEADER",
    "SEPARATOR",
    "read_output",
    "write_group_means",
    "write_observations",
]
