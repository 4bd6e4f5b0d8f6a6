"""
Core module for the probability calculator.

This module contains the pure computation layer: distribution and test
models, the combinatorics kernel, validation, the calculation façade and
LaTeX rendering. It never reads settings or the environment.
"""

from .models import (
    Moments,
    Distribution,
    ContinuousDistribution,
    DiscreteDistribution,
    NormalDistribution,
    ExponentialDistribution,
    GammaDistribution,
    BetaDistribution,
    LognormalDistribution,
    ParetoDistribution,
    WeibullDistribution,
    BinomialDistribution,
    PoissonDistribution,
    GeometricDistribution,
    HypergeometricDistribution,
    NegativeBinomialDistribution,
    WilcoxonSignedRank,
    MannWhitneyU,
    WilcoxonRankSum,
    RunsTest,
    CalculatorOptions,
)

from .results import CalculationResult

from .validation import CalculationError, ParameterError, RangeError

from .statistics import ProviderUnavailableError, get_provider, set_provider

from .calculator import CalculationRequest, QueryKind, calculate

from .reports import render_latex_report, render_text_report, format_number_for_latex, format_number

__all__ = [
    # Models
    "Moments",
    "Distribution",
    "ContinuousDistribution",
    "DiscreteDistribution",
    "NormalDistribution",
    "ExponentialDistribution",
    "GammaDistribution",
    "BetaDistribution",
    "LognormalDistribution",
    "ParetoDistribution",
    "WeibullDistribution",
    "BinomialDistribution",
    "PoissonDistribution",
    "GeometricDistribution",
    "HypergeometricDistribution",
    "NegativeBinomialDistribution",
    "WilcoxonSignedRank",
    "MannWhitneyU",
    "WilcoxonRankSum",
    "RunsTest",
    "CalculatorOptions",

    # Results
    "CalculationResult",

    # Errors
    "CalculationError",
    "ParameterError",
    "RangeError",
    "ProviderUnavailableError",

    # Provider
    "get_provider",
    "set_provider",

    # Calculator
    "CalculationRequest",
    "QueryKind",
    "calculate",

    # Reports
    "render_latex_report",
    "render_text_report",
    "format_number_for_latex",
    "format_number",
]
