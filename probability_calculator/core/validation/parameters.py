"""Parameter and range validation for calculation requests.

Two kinds of failure are distinguished:

- ``ParameterError``: a distribution parameter violates its domain
  (non-positive scale, probability outside [0, 1], non-integer count,
  sample size above a supported bound). Detected before construction.
- ``RangeError``: a query value lies outside the support, or the bounds of
  a "between" query are inverted. Detected at query time.

Both subclass ``ValueError`` and carry the offending field name so a caller
can point the user at the input that needs fixing.
"""

from __future__ import annotations

import math
import numbers
from typing import Any, Mapping, Optional


class CalculationError(Exception):
    """Base class for all calculation failures."""


class ParameterError(CalculationError, ValueError):
    """A distribution parameter is outside its domain."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class RangeError(CalculationError, ValueError):
    """A query value is outside the distribution's support."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


def _as_number(field: str, value: Any, error=ParameterError) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        try:
            value = float(value)
        except (TypeError, ValueError):
            raise error(field, f"{field} must be a number, got {value!r}") from None
    value = float(value)
    if math.isnan(value):
        raise error(field, f"{field} must be a number, got nan")
    return value


def is_integer(value: float) -> bool:
    """True for finite values with no fractional part."""
    return math.isfinite(value) and float(value) == math.floor(value)


def require_number(params: Mapping[str, Any], field: str, error=ParameterError) -> float:
    """Fetch ``field`` from ``params`` as a float."""
    if field not in params or params[field] is None or params[field] == "":
        raise error(field, f"Please enter a value for {field}")
    return _as_number(field, params[field], error)


def require_positive(params: Mapping[str, Any], field: str, label: Optional[str] = None) -> float:
    value = require_number(params, field)
    if value <= 0:
        raise ParameterError(field, f"{label or field} must be positive")
    return value


def require_probability(
    params: Mapping[str, Any],
    field: str,
    open_interval: bool = False,
    label: Optional[str] = None,
) -> float:
    """Probability in [0, 1], or in (0, 1) when ``open_interval`` is set."""
    value = require_number(params, field)
    name = label or field
    if open_interval:
        if value <= 0 or value >= 1:
            raise ParameterError(field, f"{name} must be between 0 and 1 (exclusive)")
    elif value < 0 or value > 1:
        raise ParameterError(field, f"{name} must be between 0 and 1")
    return value


def require_int(
    params: Mapping[str, Any],
    field: str,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
    label: Optional[str] = None,
    error=ParameterError,
) -> int:
    """Integer in [minimum, maximum] (either bound optional)."""
    value = require_number(params, field, error)
    name = label or field
    if not is_integer(value):
        raise error(field, f"{name} must be an integer")
    value = int(value)
    if minimum is not None and value < minimum:
        if minimum == 0:
            raise error(field, f"{name} must be a non-negative integer")
        if minimum == 1 and maximum is None:
            raise error(field, f"{name} must be a positive integer")
        raise error(field, f"{name} must be an integer between {minimum} and {maximum}")
    if maximum is not None and value > maximum:
        if minimum is None:
            raise error(field, f"{name} must be at most {maximum}")
        raise error(field, f"{name} must be an integer between {minimum} and {maximum}")
    return value


def require_statistic(
    params: Mapping[str, Any],
    field: str,
    xmin: float,
    xmax: float,
    label: Optional[str] = None,
) -> int:
    """Integer statistic inside the inclusive support [xmin, xmax]."""
    value = require_number(params, field, RangeError)
    name = label or field
    if value < xmin or value > xmax or not is_integer(value):
        upper = "infinity" if math.isinf(xmax) else f"{xmax:g}"
        raise RangeError(field, f"{name} must be an integer between {xmin:g} and {upper}")
    return int(value)


def require_ordered(x1: float, x2: float, strict: bool = False, field: str = "x2") -> None:
    """Check x1 <= x2 (x1 < x2 when ``strict``) for a "between" query."""
    if strict and x1 >= x2:
        raise RangeError(field, "X1 must be less than X2 for between calculation")
    if not strict and x1 > x2:
        raise RangeError(field, "X1 must be less than or equal to X2")
