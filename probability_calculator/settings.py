"""Calculator settings read from the environment.

This module provides a centralized settings manager that:
- Reads user preferences from ``PROBCALC_<KEY>`` environment variables
- Falls back to defaults when a variable is unset
- Validates and clamps values to safe ranges
- Builds the CalculatorOptions used by the calculation façade

Unparsable values are ignored (with a warning) in favour of the default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from .core.models.options import CalculatorOptions

logger = logging.getLogger(__name__)


# =============================================================================
# Type conversion helpers
# =============================================================================

def _to_int(v: Any) -> int:
    """Integer conversion; integral strings such as "8" or "8.0" are accepted."""
    if isinstance(v, str):
        v = v.strip()
        number = float(v)
        if number != int(number):
            raise ValueError(f"not an integer: {v!r}")
        return int(number)
    return int(v)


def _to_str(v: Any) -> str:
    """Robust string conversion."""
    if v is None:
        return ""
    return str(v)


# =============================================================================
# Validators / Clamps
# =============================================================================

def _clamp(min_val: float, max_val: float) -> Callable[[float], float]:
    """Return a clamping function for numeric values."""
    def clamp(v: float) -> float:
        return max(min_val, min(max_val, v))
    return clamp


def _one_of(valid_values: Tuple[str, ...], fallback: str) -> Callable[[str], str]:
    """Return a function that validates string is one of allowed values."""
    def validate(v: str) -> str:
        v_lower = v.lower().strip()
        if v_lower in valid_values:
            return v_lower
        return fallback
    return validate


# Validator functions for each setting
# Format: key -> (converter, validator_or_None)
VALIDATORS: Dict[str, Tuple[Callable, Optional[Callable]]] = {
    # Exact test limits
    "signed_rank_max_n": (_to_int, _clamp(1, 100)),
    "mann_whitney_max_n": (_to_int, _clamp(1, 200)),
    "rank_sum_exact_limit": (_to_int, _clamp(1, 50)),

    # Output formatting
    "latex_digits": (_to_int, _clamp(0, 15)),
    "plain_digits": (_to_int, _clamp(0, 15)),
    "output_format": (_to_str, _one_of(("json", "latex", "text"), "json")),
    "json_indent": (_to_int, _clamp(0, 8)),

    # Logging
    "log_level": (_to_str, _one_of(("debug", "info", "warning", "error"), "warning")),
}


# =============================================================================
# Defaults dataclass
# =============================================================================

@dataclass(frozen=True)
class _Defaults:
    """Default values for all calculator settings."""

    # Exact test limits
    signed_rank_max_n: int = 25
    mann_whitney_max_n: int = 50
    rank_sum_exact_limit: int = 8

    # Output formatting
    latex_digits: int = 4
    plain_digits: int = 6
    output_format: str = "json"            # json, latex, text
    json_indent: int = 2

    # Logging
    log_level: str = "warning"             # debug, info, warning, error


# =============================================================================
# Main settings class
# =============================================================================

class CalculatorSettings:
    """
    Calculator settings stored in environment variables.

    Every key maps to ``PROBCALC_<KEY>`` (upper case), e.g.
    ``PROBCALC_SIGNED_RANK_MAX_N=20``.

    Features:
    - Type-safe: converts environment strings back to correct types
    - Validated: clamps numeric values to safe ranges
    - Tolerant: unparsable values fall back to the default with a warning

    Usage:
        # Get a setting (always returns valid, clamped value)
        digits = CalculatorSettings.get("latex_digits")

        # Set a setting for this process
        CalculatorSettings.set("latex_digits", 6)

        # Reset to defaults
        CalculatorSettings.reset()  # all settings
        CalculatorSettings.reset("latex_digits")  # single setting

        # Options for the calculation façade
        options = CalculatorSettings.to_options()
    """

    PREFIX = "PROBCALC_"
    DEFAULTS = _Defaults()

    @classmethod
    def _defaults_dict(cls) -> Dict[str, Any]:
        """Get defaults as a dictionary."""
        return cls.DEFAULTS.__dict__.copy()

    @classmethod
    def env_var(cls, key: str) -> str:
        """Environment variable name for a setting key."""
        return cls.PREFIX + key.upper()

    @classmethod
    def _convert_and_validate(cls, key: str, raw_value: Any, default: Any) -> Any:
        """
        Convert raw value to correct type and validate/clamp.

        Args:
            key: Setting key
            raw_value: Value from the environment (a string)
            default: Default value, returned when conversion fails

        Returns:
            Converted and validated value
        """
        converter, validator = VALIDATORS[key]
        try:
            value = converter(raw_value)
        except (ValueError, TypeError, OverflowError):
            logger.warning(
                "Ignoring invalid value %r for %s; using default %r",
                raw_value, cls.env_var(key), default,
            )
            return default
        if validator is not None:
            validated = validator(value)
            if validated != value:
                logger.warning("%s=%r adjusted to %r", cls.env_var(key), raw_value, validated)
            value = validated
        return value

    @classmethod
    def _require_key(cls, key: str) -> Dict[str, Any]:
        defaults = cls._defaults_dict()
        if key not in defaults:
            raise KeyError(f"Unknown setting key: {key}")
        return defaults

    @classmethod
    def get(cls, key: str, environ: Optional[Mapping[str, str]] = None) -> Any:
        """
        Get a setting value.

        The value is:
        1. Read from the environment (or the default if unset)
        2. Converted to the correct type
        3. Validated/clamped to safe range

        Args:
            key: Setting key (must exist in _Defaults)
            environ: Mapping to read instead of ``os.environ``

        Returns:
            The setting value, converted and validated

        Raises:
            KeyError: If the key is not a valid setting
        """
        default = cls._require_key(key)[key]
        source = os.environ if environ is None else environ
        raw_value = source.get(cls.env_var(key))
        if raw_value is None or raw_value == "":
            return default
        return cls._convert_and_validate(key, raw_value, default)

    @classmethod
    def set(cls, key: str, value: Any) -> None:
        """
        Set a setting value for the current process.

        The value is validated before storing.

        Raises:
            KeyError: If the key is not a valid setting
        """
        default = cls._require_key(key)[key]
        validated = cls._convert_and_validate(key, value, default)
        os.environ[cls.env_var(key)] = str(validated)

    @classmethod
    def reset(cls, key: Union[str, None] = None) -> None:
        """
        Reset setting(s) to default values.

        Args:
            key: Setting key to reset, or None to reset all settings

        Raises:
            KeyError: If the key is not a valid setting
        """
        keys = cls.keys() if key is None else [key]
        for k in keys:
            cls._require_key(k)
            os.environ.pop(cls.env_var(k), None)

    @classmethod
    def all(cls, environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
        """Get all settings as a dictionary (all values validated)."""
        return {k: cls.get(k, environ) for k in cls._defaults_dict()}

    @classmethod
    def keys(cls) -> list:
        """Get all setting keys."""
        return list(cls._defaults_dict().keys())

    @classmethod
    def is_default(cls, key: str) -> bool:
        """Check if a setting has its default value."""
        return cls.get(key) == cls._defaults_dict()[key]

    @classmethod
    def get_default(cls, key: str) -> Any:
        """Get the default value for a setting."""
        return cls._require_key(key)[key]

    @classmethod
    def to_options(cls, environ: Optional[Mapping[str, str]] = None) -> CalculatorOptions:
        """CalculatorOptions built from the current settings."""
        values = cls.all(environ)
        return CalculatorOptions(
            signed_rank_max_n=values["signed_rank_max_n"],
            mann_whitney_max_n=values["mann_whitney_max_n"],
            rank_sum_exact_limit=values["rank_sum_exact_limit"],
            latex_digits=values["latex_digits"],
            plain_digits=values["plain_digits"],
        )
