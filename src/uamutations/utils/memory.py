"""Memory helpers for the quadratic matching tables."""

import gc
import logging

try:
    import psutil
except ImportError:  # pragma: no cover - optional dependency
    psutil = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)


def table_nbytes(n_rows: int, n_cols: int, itemsize: int = 1) -> int:
    """Bytes needed by a dense ``(n_rows + 1) x (n_cols + 1)`` DP table."""

    return (int(n_rows) + 1) * (int(n_cols) + 1) * int(itemsize)


def clean_memory(label: str = "") -> None:
    """
    Force garbage collection and log memory usage.
    Called between pipeline stages so the matching tables are released early.
    """
    gc.collect()

    if psutil is not None:
        mem = psutil.virtual_memory()
        logger.info(
            "🧹 Released memory after %s: %.1f%% used, %.1f GB free",
            label or "step",
            mem.percent,
            mem.available / 1e9,
        )
        return

    logger.info("🧹 Released memory after %s", label or "step")
