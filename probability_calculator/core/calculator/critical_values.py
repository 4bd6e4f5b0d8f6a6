"""probability_calculator.core.calculator.critical_values

Critical values and p-values of the z, t, chi-square and F statistics.

Critical values at significance level alpha:
- z:          right inv(1-alpha), left inv(alpha), two-tail inv(1-alpha/2)
- t(df):      right inv(1-alpha), left inv(alpha), two-tail inv(1-alpha/2)
- chi2(df):   right inv(1-alpha)
- F(d1, d2):  right inv(1-alpha)

p-values of an observed statistic:
- z, t:       single tail 1 - cdf(|s|), double tail twice that
- chi2, F:    right tail 1 - cdf(s)

All inverse and cumulative functions come from the special-function
provider.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..statistics.provider import SpecialFunctionProvider, get_provider
from ..validation.parameters import ParameterError, require_int, require_number


def _functions(provider: Optional[SpecialFunctionProvider]) -> SpecialFunctionProvider:
    return provider.load() if provider is not None else get_provider()


def _check_alpha(alpha: float) -> None:
    if not 0 < alpha < 1:
        raise ParameterError("alpha", "Significance level must be between 0 and 1")


def _check_df(df: float, field: str = "df", label: str = "Degrees of freedom") -> None:
    if df <= 0 or df != int(df):
        raise ParameterError(field, f"{label} must be a positive integer")


def _check_non_negative(value: float, field: str, label: str) -> None:
    if value < 0:
        raise ParameterError(field, f"{label} cannot be negative")


# ----------------------------
# Critical values
# ----------------------------


def z_critical(alpha: float, provider: Optional[SpecialFunctionProvider] = None) -> Dict[str, float]:
    """Standard normal critical values keyed by tail."""
    _check_alpha(alpha)
    fn = _functions(provider)
    return {
        "right": fn.inv("normal", 1.0 - alpha, 0.0, 1.0),
        "left": fn.inv("normal", alpha, 0.0, 1.0),
        "two-tail": fn.inv("normal", 1.0 - alpha / 2.0, 0.0, 1.0),
    }


def t_critical(
    alpha: float, df: float, provider: Optional[SpecialFunctionProvider] = None
) -> Dict[str, float]:
    """Student t critical values keyed by tail."""
    _check_alpha(alpha)
    _check_df(df)
    fn = _functions(provider)
    return {
        "right": fn.inv("studentt", 1.0 - alpha, df),
        "left": fn.inv("studentt", alpha, df),
        "two-tail": fn.inv("studentt", 1.0 - alpha / 2.0, df),
    }


def chi_square_critical(
    alpha: float, df: float, provider: Optional[SpecialFunctionProvider] = None
) -> Dict[str, float]:
    """Right-tail chi-square critical value."""
    _check_alpha(alpha)
    _check_df(df)
    return {"right": _functions(provider).inv("chisquare", 1.0 - alpha, df)}


def f_critical(
    alpha: float, df1: float, df2: float, provider: Optional[SpecialFunctionProvider] = None
) -> Dict[str, float]:
    """Right-tail F critical value."""
    _check_alpha(alpha)
    _check_df(df1, "df1", "Numerator degrees of freedom")
    _check_df(df2, "df2", "Denominator degrees of freedom")
    return {"right": _functions(provider).inv("centralF", 1.0 - alpha, df1, df2)}


# ----------------------------
# p-values
# ----------------------------


def z_p_value(z: float, provider: Optional[SpecialFunctionProvider] = None) -> Dict[str, float]:
    """Single- and double-tail p-values of a z statistic."""
    single = 1.0 - _functions(provider).cdf("normal", abs(z), 0.0, 1.0)
    return {"single-tail": single, "double-tail": 2.0 * single}


def t_p_value(
    t: float, df: float, provider: Optional[SpecialFunctionProvider] = None
) -> Dict[str, float]:
    """Single- and double-tail p-values of a t statistic."""
    _check_df(df)
    single = 1.0 - _functions(provider).cdf("studentt", abs(t), df)
    return {"single-tail": single, "double-tail": 2.0 * single}


def chi_square_p_value(
    chi2: float, df: float, provider: Optional[SpecialFunctionProvider] = None
) -> Dict[str, float]:
    """Right-tail p-value P(X >= chi2)."""
    _check_non_negative(chi2, "chi2", "Chi-square value")
    _check_df(df)
    return {"right-tail": 1.0 - _functions(provider).cdf("chisquare", chi2, df)}


def f_p_value(
    f: float, df1: float, df2: float, provider: Optional[SpecialFunctionProvider] = None
) -> Dict[str, float]:
    """Right-tail p-value P(X >= f)."""
    _check_non_negative(f, "f", "F-statistic")
    _check_df(df1, "df1", "Numerator degrees of freedom")
    _check_df(df2, "df2", "Denominator degrees of freedom")
    return {"right-tail": 1.0 - _functions(provider).cdf("centralF", f, df1, df2)}


# ----------------------------
# Request adapters
# ----------------------------

STATISTICS = {
    "z": "z",
    "t": "t",
    "chi-square": "chi-square",
    "chisquare": "chi-square",
    "chi2": "chi-square",
    "f": "f",
}

_DISPLAY_NAMES = {
    "z": "Standard Normal (z)",
    "t": "Student t",
    "chi-square": "Chi-square",
    "f": "F",
}

_STATISTIC_FIELDS = {"z": "z", "t": "t", "chi-square": "chi2", "f": "f"}

_SYMBOLS = {"z": "z", "t": "t", "chi-square": "\\chi^2", "f": "F"}


def _degrees_of_freedom(statistic: str, params: Mapping[str, Any]) -> Dict[str, int]:
    if statistic in ("t", "chi-square"):
        return {"df": require_int(params, "df", minimum=1, label="Degrees of freedom")}
    if statistic == "f":
        return {
            "df1": require_int(params, "df1", minimum=1, label="Numerator degrees of freedom"),
            "df2": require_int(params, "df2", minimum=1, label="Denominator degrees of freedom"),
        }
    return {}


def critical_values(statistic: str, params: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate ``params`` and return {"parameters", "arguments", "values"}."""
    alpha = require_number(params, "alpha")
    _check_alpha(alpha)
    dof = _degrees_of_freedom(statistic, params)
    if statistic == "z":
        values = z_critical(alpha)
    elif statistic == "t":
        values = t_critical(alpha, dof["df"])
    elif statistic == "chi-square":
        values = chi_square_critical(alpha, dof["df"])
    else:
        values = f_critical(alpha, dof["df1"], dof["df2"])
    return {"parameters": dof, "arguments": {"alpha": alpha}, "values": values}


def p_values(statistic: str, params: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate ``params`` and return {"parameters", "arguments", "values"}."""
    field_name = _STATISTIC_FIELDS[statistic]
    observed = require_number(params, field_name)
    dof = _degrees_of_freedom(statistic, params)
    if statistic == "z":
        values = z_p_value(observed)
    elif statistic == "t":
        values = t_p_value(observed, dof["df"])
    elif statistic == "chi-square":
        values = chi_square_p_value(observed, dof["df"])
    else:
        values = f_p_value(observed, dof["df1"], dof["df2"])
    return {"parameters": dof, "arguments": {field_name: observed}, "values": values}


def display_name(statistic: str) -> str:
    return _DISPLAY_NAMES[statistic]


def symbol(statistic: str) -> str:
    """LaTeX symbol of the statistic."""
    return _SYMBOLS[statistic]
