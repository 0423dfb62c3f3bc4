"""Run configuration for a single mutation computation."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterable, Optional

from .strategies import DEFAULT_STRATEGY, STRATEGIES
from .validations import PreflightError

_DEFAULT_NENTRIES = 1000
_ENV_VAR = "UAM_NENTRIES"
DEFAULT_GROUP_FIELD = "index"


def resolve_nentries(nentries: int | None) -> int:
    """Return ``nentries`` or, when unset, the ``UAM_NENTRIES`` environment default."""

    if nentries is None:
        raw_env = os.environ.get(_ENV_VAR)
        if raw_env:
            try:
                nentries = int(raw_env)
            except ValueError as exc:
                raise PreflightError(
                    f"{_ENV_VAR} must be an integer (got {raw_env!r})"
                ) from exc
        else:
            nentries = _DEFAULT_NENTRIES
    return int(nentries)


@dataclass(frozen=True)
class MutationConfig:
    """Inputs that select what is mutated and how.

    ``group_field=None`` switches the output from per-group means to one row
    per observation.
    """

    varname: str
    varextra: tuple[str, ...] = ()
    nentries: Optional[int] = None
    group_field: Optional[str] = DEFAULT_GROUP_FIELD
    strategy: str = DEFAULT_STRATEGY
    relative: bool = True
    apply_transforms: bool = True
    _resolved: int = field(default=0, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.varname or not self.varname.strip():
            raise PreflightError("varname must be a non-empty field name")
        object.__setattr__(self, "varextra", tuple(self.varextra))
        if self.varname in self.varextra:
            raise PreflightError(f"{self.varname!r} cannot also be an auxiliary variable")
        if self.group_field is not None and not self.group_field.strip():
            raise PreflightError("group_field must be a non-empty field name or None")
        if self.group_field is not None and self.group_field in self.variables:
            raise PreflightError(
                f"group field {self.group_field!r} cannot also be a mutation variable"
            )
        resolved = resolve_nentries(self.nentries)
        if resolved <= 0:
            raise PreflightError(f"nentries must be greater than zero (got {resolved})")
        object.__setattr__(self, "_resolved", resolved)
        if self.strategy.strip().lower() not in STRATEGIES:
            raise PreflightError(
                f"Unknown match strategy {self.strategy!r}; expected one of {sorted(STRATEGIES)}"
            )

    @property
    def variables(self) -> list[str]:
        return [self.varname, *self.varextra]

    @property
    def max_entries(self) -> int:
        return self._resolved

    @property
    def grouped(self) -> bool:
        return self.group_field is not None

    @classmethod
    def from_values(
        cls,
        varname: str,
        varextra: Iterable[str] | None = None,
        **kwargs,
    ) -> "MutationConfig":
        return cls(varname=varname, varextra=tuple(varextra or ()), **kwargs)


__all__ = ["DEFAULT_GROUP_FIELD", "MutationConfig", "resolve_nentries"]
