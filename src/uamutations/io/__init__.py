"""I/O adapters for record files and delimited results."""

from .records import read_records, readfile
from .writer import read_output, write_group_means, write_observations

__all__ = [
    "read_output",
    "read_records",
    "readfile",
    "write_group_means",
    "write_observations",
]
