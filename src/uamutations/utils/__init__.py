"""Small shared helpers."""

from .memory import clean_memory, table_nbytes
from .stats import mean_sd

__all__ = ["clean_memory", "mean_sd", "table_nbytes"]
