"""
Discrete distributions.

Conventions:
- Geometric counts failures before the first success (support 0, 1, 2, ...)
- Negative binomial counts failures before the r-th success
- Hypergeometric: population N, M success states, n draws without replacement

Cumulative probabilities are sums of the mass function from the support
floor (Geometric uses its closed form 1 - (1-p)^(k+1)).
"""

import math
from dataclasses import dataclass

from .base import DiscreteDistribution
from ..statistics.combinatorics import combination, log_factorial
from ..validation.parameters import ParameterError

# C(n, k) stays below the float limit for n up to about 1020
_FLOAT_SAFE_N = 1000


def _log_comb(n: int, k: int) -> float:
    return log_factorial(n) - log_factorial(k) - log_factorial(n - k)


def _comb_pow(n: int, k: int, a: float, i: int, b: float, j: int) -> float:
    """C(n, k) * a**i * b**j, in log space once C(n, k) could overflow a float."""
    if n <= _FLOAT_SAFE_N:
        return combination(n, k) * a ** i * b ** j
    if (a == 0 and i > 0) or (b == 0 and j > 0):
        return 0.0
    log_value = _log_comb(n, k)
    if i:
        log_value += i * math.log(a)
    if j:
        log_value += j * math.log(b)
    return math.exp(log_value)


def _check_probability(dist, name: str, label: str, open_interval: bool) -> None:
    p = getattr(dist, name)
    if open_interval and not 0 < p < 1:
        raise ParameterError(name, f"{label} must be between 0 and 1 (exclusive)")
    if not open_interval and not 0 <= p <= 1:
        raise ParameterError(name, f"{label} must be between 0 and 1")


@dataclass(frozen=True)
class BinomialDistribution(DiscreteDistribution):
    """
    Number of successes in n independent trials.

    Attributes:
        n: Number of trials (positive integer)
        p: Success probability in [0, 1]
    """

    n: int
    p: float

    name = "Binomial"

    def __post_init__(self):
        self._coerce_int("n")
        self._coerce_float("p")
        if self.n <= 0:
            raise ParameterError("n", "Number of trials (n) must be a positive integer")
        _check_probability(self, "p", "Probability (p)", open_interval=False)
        self._set_support(0, self.n)

    def mean(self) -> float:
        return self.n * self.p

    def variance(self) -> float:
        return self.n * self.p * (1.0 - self.p)

    def _mass(self, k: int) -> float:
        return _comb_pow(self.n, k, self.p, k, 1.0 - self.p, self.n - k)


@dataclass(frozen=True)
class PoissonDistribution(DiscreteDistribution):
    """
    Poisson distribution with rate lam.

    Attributes:
        lam: Expected count lambda (> 0)
    """

    lam: float

    name = "Poisson"

    def __post_init__(self):
        self._coerce_float("lam")
        self._require_positive("lam", "Lambda (λ)")
        self._set_support(0, math.inf)

    def mean(self) -> float:
        return self.lam

    def variance(self) -> float:
        return self.lam

    def _mass(self, k: int) -> float:
        # e^-lam lam^k / k!, in logs so large k cannot overflow
        if k == 0:
            return math.exp(-self.lam)
        return math.exp(-self.lam + k * math.log(self.lam) - log_factorial(k))


@dataclass(frozen=True)
class GeometricDistribution(DiscreteDistribution):
    """
    Number of failures before the first success.

    Attributes:
        p: Success probability in (0, 1)
    """

    p: float

    name = "Geometric"

    def __post_init__(self):
        self._coerce_float("p")
        _check_probability(self, "p", "Probability p", open_interval=True)
        self._set_support(0, math.inf)

    def mean(self) -> float:
        return (1.0 - self.p) / self.p

    def variance(self) -> float:
        return (1.0 - self.p) / (self.p * self.p)

    def _mass(self, k: int) -> float:
        return (1.0 - self.p) ** k * self.p

    def cdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        if math.isinf(x):
            return 1.0
        k = math.floor(x)
        return 1.0 - (1.0 - self.p) ** (k + 1)


@dataclass(frozen=True)
class HypergeometricDistribution(DiscreteDistribution):
    """
    Successes in n draws without replacement.

    Attributes:
        N: Population size (positive integer)
        M: Number of success states in the population (0 <= M <= N)
        n: Number of draws (1 <= n <= N)

    Support: [max(0, n + M - N), min(n, M)].
    """

    N: int
    M: int
    n: int

    name = "Hypergeometric"

    def __post_init__(self):
        self._coerce_int("N", "M", "n")
        if self.N <= 0:
            raise ParameterError("N", "Population size N must be a positive integer")
        if self.M < 0 or self.M > self.N:
            raise ParameterError("M", "Number of success states M must be between 0 and N")
        if self.n <= 0 or self.n > self.N:
            raise ParameterError("n", "Number of draws n must be between 1 and N")
        self._set_support(max(0, self.n + self.M - self.N), min(self.n, self.M))

    def mean(self) -> float:
        return self.n * self.M / self.N

    def variance(self) -> float:
        if self.N == 1:
            return 0.0
        frac = self.M / self.N
        return self.n * frac * (1.0 - frac) * (self.N - self.n) / (self.N - 1)

    def _mass(self, k: int) -> float:
        if self.N > _FLOAT_SAFE_N:
            return math.exp(
                _log_comb(self.M, k)
                + _log_comb(self.N - self.M, self.n - k)
                - _log_comb(self.N, self.n)
            )
        # exact integer ratio, correctly rounded
        numerator = combination(self.M, k) * combination(self.N - self.M, self.n - k)
        return numerator / combination(self.N, self.n)


@dataclass(frozen=True)
class NegativeBinomialDistribution(DiscreteDistribution):
    """
    Number of failures before the r-th success.

    Attributes:
        r: Number of successes (positive integer)
        p: Success probability in (0, 1)
    """

    r: int
    p: float

    name = "Negative Binomial"

    def __post_init__(self):
        self._coerce_int("r")
        self._coerce_float("p")
        if self.r <= 0:
            raise ParameterError("r", "Number of successes r must be a positive integer")
        _check_probability(self, "p", "Probability p", open_interval=True)
        self._set_support(0, math.inf)

    def mean(self) -> float:
        return self.r * (1.0 - self.p) / self.p

    def variance(self) -> float:
        return self.r * (1.0 - self.p) / (self.p * self.p)

    def _mass(self, k: int) -> float:
        return _comb_pow(k + self.r - 1, k, self.p, self.r, 1.0 - self.p, k)
