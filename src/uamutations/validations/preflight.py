from __future__ import annotations

from pathlib import Path
from typing import Iterable, Mapping, Sequence


class PreflightError(RuntimeError):
    pass


def _exists(p: Path) -> bool:
    try:
        return p.exists()
    except OSError:
        return False


def require_paths(paths: Mapping[str, Path], label: str) -> None:
    missing = [key for key, value in paths.items() if not _exists(Path(value))]
    if missing:
        raise PreflightError(f"Missing {label}: {', '.join(missing)}")


def validate_inputs(source_path: Path, target_path: Path, nentries: int) -> None:
    """Check both population files exist and the record limit is usable."""

    require_paths(
        {str(source_path): Path(source_path), str(target_path): Path(target_path)},
        "input files",
    )
    require_record_limit(nentries)


def require_record_limit(nentries: int) -> None:
    if int(nentries) <= 0:
        raise PreflightError(f"nentries must be greater than zero (got {nentries})")


def require_fields(
    record: Mapping[str, object],
    fields: Iterable[str],
    *,
    source: str,
    position: int,
) -> None:
    missing = [name for name in fields if name not in record]
    if missing:
        raise PreflightError(
            f"{source}: record {position} is missing field(s) {', '.join(missing)}"
        )


def require_same_variables(shape1: Sequence[int], shape2: Sequence[int]) -> None:
    if shape1[0] != shape2[0]:
        raise PreflightError(
            "Both populations must carry the same variables; "
            f"got {shape1[0]} and {shape2[0]} rows"
        )
    if shape1[1] != shape2[1]:
        raise PreflightError(
            "Both populations must have the same number of observations; "
            f"got {shape1[1]} and {shape2[1]}. Lower nentries to the size of "
            "the smaller file."
        )
