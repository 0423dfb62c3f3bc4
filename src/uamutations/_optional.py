"""Helpers for optional heavy dependencies."""
from __future__ import annotations


class OptionalDependencyError(RuntimeError):
    pass


def _missing(extra: str, package: str) -> OptionalDependencyError:
    return OptionalDependencyError(
        "Optional dependency '{package}' is required for this feature. "
        "Install uamutations with the '{extra}' extra, e.g. "
        "`pip install uamutations[{extra}]`.".format(package=package, extra=extra)
    )


def require_geopandas():
    try:
        import geopandas as gpd  # type: ignore
    except Exception as exc:  # pragma: no cover - exercised in lite environments
        raise _missing("full", "geopandas") from exc
    return gpd
