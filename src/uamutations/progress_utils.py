"""Utilities for consistent progress reporting in quadratic matching loops."""

from __future__ import annotations

import logging
import sys
from typing import Optional

logger = logging.getLogger(__name__)


def _is_interactive() -> bool:
    try:
        return sys.stderr.isatty()
    except (AttributeError, ValueError):
        return False


class MatchProgressReporter:
    """Unified progress reporter for row-by-row matching loops."""

    def __init__(
        self,
        stage_name: str,
        total_steps: int,
        interactive_mode: bool | None = None,
        log_every: int | None = None,
    ) -> None:
        self.stage_name = stage_name
        self.total = total_steps
        self.interactive = _is_interactive() if interactive_mode is None else interactive_mode
        if log_every is None:
            log_every = max(1, total_steps // 10)
        self.log_every = max(1, log_every)

        self.count = 0
        self._tqdm: Optional[object] = None

        if self.interactive:
            from tqdm import tqdm  # type: ignore[import-not-found]

            self._tqdm = tqdm(
                total=self.total,
                desc=stage_name,
                unit="obs",
                leave=False,
                mininterval=0.5,
            )

    def update(self, n: int = 1) -> None:
        self.count += n
        if self.interactive and self._tqdm is not None:
            self._tqdm.update(n)  # type: ignore[attr-defined]
        else:
            if (self.count % self.log_every == 0) or (self.count == self.total):
                pct = (self.count / self.total) * 100 if self.total > 0 else 0.0
                logger.debug(
                    "%s progress: %d/%d (%.1f%%)",
                    self.stage_name,
                    self.count,
                    self.total,
                    pct,
                )

    def close(self) -> None:
        if self.interactive and self._tqdm is not None:
            self._tqdm.close()  # type: ignore[attr-defined]

    def __enter__(self) -> "MatchProgressReporter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


__all__ = ["MatchProgressReporter"]
