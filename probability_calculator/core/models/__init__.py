"""
Distribution and test models for the probability calculator.

This module provides the core value objects:
- Distribution: Base class, with ContinuousDistribution and DiscreteDistribution
- Continuous families: Normal, Exponential, Gamma, Beta, Log-normal, Pareto, Weibull
- Discrete families: Binomial, Poisson, Geometric, Hypergeometric, Negative Binomial
- Nonparametric tests: Wilcoxon signed-rank, Mann-Whitney U, Wilcoxon rank-sum, runs
- CalculatorOptions: Configuration for a calculation
"""

from .base import Moments, Distribution, ContinuousDistribution, DiscreteDistribution
from .continuous import (
    NormalDistribution,
    ExponentialDistribution,
    GammaDistribution,
    BetaDistribution,
    LognormalDistribution,
    ParetoDistribution,
    WeibullDistribution,
)
from .discrete import (
    BinomialDistribution,
    PoissonDistribution,
    GeometricDistribution,
    HypergeometricDistribution,
    NegativeBinomialDistribution,
)
from .nonparametric import WilcoxonSignedRank, MannWhitneyU, WilcoxonRankSum, RunsTest
from .options import CalculatorOptions

__all__ = [
    # Base
    "Moments",
    "Distribution",
    "ContinuousDistribution",
    "DiscreteDistribution",

    # Continuous
    "NormalDistribution",
    "ExponentialDistribution",
    "GammaDistribution",
    "BetaDistribution",
    "LognormalDistribution",
    "ParetoDistribution",
    "WeibullDistribution",

    # Discrete
    "BinomialDistribution",
    "PoissonDistribution",
    "GeometricDistribution",
    "HypergeometricDistribution",
    "NegativeBinomialDistribution",

    # Nonparametric tests
    "WilcoxonSignedRank",
    "MannWhitneyU",
    "WilcoxonRankSum",
    "RunsTest",

    # Options
    "CalculatorOptions",
]
