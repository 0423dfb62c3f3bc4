"""Console entry points."""
from __future__ import annotations

import sys
from typing import NoReturn, Sequence

from .._optional import OptionalDependencyError
from ..validations import NumericalError, PreflightError
from .mutate_cli import main as mutate_cli_main

__all__ = ["main"]


def _die(msg: str, code: int = 2) -> NoReturn:
    print(f"[uamutations] {msg}", file=sys.stderr)
    raise SystemExit(code)


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for ``uamutate``; failed preconditions exit with status 2."""

    try:
        mutate_cli_main(argv)
    except (PreflightError, NumericalError, OptionalDependencyError, ValueError) as exc:
        _die(str(exc))
    except OSError as exc:
        _die(f"I/O error: {exc}")
