"""Input and numerical precondition checks."""

from .numeric import NumericalError, require_finite, require_nonzero, require_nonzero_variance
from .preflight import (
    PreflightError,
    require_fields,
    require_paths,
    require_record_limit,
    require_same_variables,
    validate_inputs,
)

__all__ = [
    "NumericalError",
    "PreflightError",
    "require_fields",
    "require_finite",
    "require_nonzero",
    "require_nonzero_variance",
    "require_paths",
    "require_record_limit",
    "require_same_variables",
    "validate_inputs",
]
