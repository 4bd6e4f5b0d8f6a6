"""Statistics primitives for the probability calculator.

This package contains the numerical building blocks shared by the
distribution and test models:
- Combinatorics (factorial, log-factorial, combination, Gamma function)
- Exact rank-statistic counts (signed-rank, Mann-Whitney)
- The special-function provider for normal/gamma/beta families (SciPy)
"""

from .combinatorics import factorial, log_factorial, combination, gamma_function
from .rank_counts import signed_rank_counts, mann_whitney_counts
from .provider import (
    SpecialFunctionProvider,
    ProviderUnavailableError,
    get_provider,
    set_provider,
)

__all__ = [
    "factorial",
    "log_factorial",
    "combination",
    "gamma_function",
    "signed_rank_counts",
    "mann_whitney_counts",
    "SpecialFunctionProvider",
    "ProviderUnavailableError",
    "get_provider",
    "set_provider",
]
