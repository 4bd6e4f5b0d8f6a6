"""
Probability Calculator

Probabilities, quantiles and moments for standard probability
distributions and for the null distributions of nonparametric rank tests.

Conventions:
- Gamma is parameterized by shape alpha and scale beta (rate = 1/beta)
- Geometric and Negative Binomial count failures before a success
- Log-normal mu and sigma are those of the underlying normal
- Discrete supports are inclusive integer ranges [xmin, xmax]
- Percentile inputs are probabilities in (0, 1) or percentages in (0, 100)
- Infinite moments (Pareto with small alpha) are math.inf, never NaN
"""

__version__ = "1.0.0"
__author__ = "Probability Calculator"

from .core.models import (
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
from .core.results import CalculationResult
from .core.validation import CalculationError, ParameterError, RangeError
from .core.statistics import ProviderUnavailableError
from .core.calculator import CalculationRequest, calculate

__all__ = [
    # Version
    "__version__",

    # Continuous distributions
    "NormalDistribution",
    "ExponentialDistribution",
    "GammaDistribution",
    "BetaDistribution",
    "LognormalDistribution",
    "ParetoDistribution",
    "WeibullDistribution",

    # Discrete distributions
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

    # Calculation
    "CalculationRequest",
    "CalculationResult",
    "calculate",

    # Errors
    "CalculationError",
    "ParameterError",
    "RangeError",
    "ProviderUnavailableError",
]
