"""Validation helpers and the error taxonomy for calculation requests."""

from .parameters import (
    CalculationError,
    ParameterError,
    RangeError,
    is_integer,
    require_number,
    require_positive,
    require_probability,
    require_int,
    require_statistic,
    require_ordered,
)

__all__ = [
    "CalculationError",
    "ParameterError",
    "RangeError",
    "is_integer",
    "require_number",
    "require_positive",
    "require_probability",
    "require_int",
    "require_statistic",
    "require_ordered",
]
