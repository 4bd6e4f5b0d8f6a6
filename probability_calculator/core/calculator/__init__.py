"""
Calculation façade.

Turns a named operation plus numeric parameters into a validated
distribution (or test statistic) query:
- CalculationRequest / QueryKind: request shape and query kinds
- calculate: single entry point returning a CalculationResult
- z/t/chi-square/F critical values and p-values
"""

from .requests import CalculationRequest, QueryKind, parse_query
from .distributions import FAMILIES, Family, build_distribution, lookup_family
from .critical_values import (
    z_critical,
    t_critical,
    chi_square_critical,
    f_critical,
    z_p_value,
    t_p_value,
    chi_square_p_value,
    f_p_value,
)
from .dispatch import calculate

__all__ = [
    # Requests
    "CalculationRequest",
    "QueryKind",
    "parse_query",

    # Families
    "FAMILIES",
    "Family",
    "build_distribution",
    "lookup_family",

    # Critical values and p-values
    "z_critical",
    "t_critical",
    "chi_square_critical",
    "f_critical",
    "z_p_value",
    "t_p_value",
    "chi_square_p_value",
    "f_p_value",

    # Entry point
    "calculate",
]
