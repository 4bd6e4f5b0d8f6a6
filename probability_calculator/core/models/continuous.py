"""
Continuous distributions.

Closed form (no special-function provider needed):
- Exponential(lam):   cdf = 1 - exp(-lam x),           percentile = -ln(1-p)/lam
- Pareto(xm, alpha):  cdf = 1 - (xm/x)^alpha, x >= xm, percentile = xm (1-p)^(-1/alpha)
- Weibull(lam, k):    cdf = 1 - exp(-(x/lam)^k),       percentile = lam (-ln(1-p))^(1/k)

Provider backed (incomplete gamma/beta/normal integrals):
- Normal(mu, sigma), Gamma(alpha shape, beta scale), Beta(alpha, beta),
  Lognormal(mu, sigma of the underlying normal)

Density and cumulative are 0 below the support floor (0, or xm for Pareto);
Beta's cumulative is 1 above its ceiling of 1.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from .base import ContinuousDistribution, ProviderBacked
from ..statistics.combinatorics import gamma_function
from ..statistics.provider import SpecialFunctionProvider


@dataclass(frozen=True)
class NormalDistribution(ProviderBacked, ContinuousDistribution):
    """
    Normal distribution N(mu, sigma^2).

    Attributes:
        mu: Mean
        sigma: Standard deviation (> 0)
    """

    mu: float
    sigma: float
    provider: Optional[SpecialFunctionProvider] = field(default=None, repr=False, compare=False)

    name = "Normal"

    def __post_init__(self):
        self._coerce_float("mu", "sigma")
        self._require_positive("sigma", "Standard deviation")

    def mean(self) -> float:
        return self.mu

    def variance(self) -> float:
        return self.sigma * self.sigma

    def sd(self) -> float:
        return self.sigma

    def pdf(self, x: float) -> float:
        return self._functions().pdf("normal", x, self.mu, self.sigma)

    def cdf(self, x: float) -> float:
        return self._functions().cdf("normal", x, self.mu, self.sigma)

    def percentile(self, p: float) -> Optional[float]:
        if not self._valid_probability(p):
            return None
        return self._functions().inv("normal", p, self.mu, self.sigma)


@dataclass(frozen=True)
class ExponentialDistribution(ContinuousDistribution):
    """
    Exponential distribution with rate lam.

    Attributes:
        lam: Rate parameter lambda (> 0)
    """

    lam: float

    name = "Exponential"

    def __post_init__(self):
        self._coerce_float("lam")
        self._require_positive("lam", "Lambda (λ)")

    def mean(self) -> float:
        return 1.0 / self.lam

    def variance(self) -> float:
        return 1.0 / (self.lam * self.lam)

    def pdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return self.lam * math.exp(-self.lam * x)

    def cdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return 1.0 - math.exp(-self.lam * x)

    def percentile(self, p: float) -> Optional[float]:
        if not self._valid_probability(p):
            return None
        if p == 1.0:
            return math.inf
        return -math.log(1.0 - p) / self.lam


@dataclass(frozen=True)
class GammaDistribution(ProviderBacked, ContinuousDistribution):
    """
    Gamma distribution in shape/scale form.

    Attributes:
        alpha: Shape parameter (> 0)
        beta: Scale parameter (> 0); the rate is 1/beta
    """

    alpha: float
    beta: float
    provider: Optional[SpecialFunctionProvider] = field(default=None, repr=False, compare=False)

    name = "Gamma"

    def __post_init__(self):
        self._coerce_float("alpha", "beta")
        self._require_positive("alpha", "Shape parameter α")
        self._require_positive("beta", "Scale parameter β")

    def mean(self) -> float:
        return self.alpha * self.beta

    def variance(self) -> float:
        return self.alpha * self.beta * self.beta

    def pdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return self._functions().pdf("gamma", x, self.alpha, self.beta)

    def cdf(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return self._functions().cdf("gamma", x, self.alpha, self.beta)

    def percentile(self, p: float) -> Optional[float]:
        if not self._valid_probability(p):
            return None
        return self._functions().inv("gamma", p, self.alpha, self.beta)


@dataclass(frozen=True)
class BetaDistribution(ProviderBacked, ContinuousDistribution):
    """
    Beta distribution on [0, 1].

    Attributes:
        alpha: Shape parameter 1 (> 0)
        beta: Shape parameter 2 (> 0)
    """

    alpha: float
    beta: float
    provider: Optional[SpecialFunctionProvider] = field(default=None, repr=False, compare=False)

    name = "Beta"

    def __post_init__(self):
        self._coerce_float("alpha", "beta")
        self._require_positive("alpha", "Shape parameter α")
        self._require_positive("beta", "Shape parameter β")

    def mean(self) -> float:
        return self.alpha / (self.alpha + self.beta)

    def variance(self) -> float:
        total = self.alpha + self.beta
        return (self.alpha * self.beta) / (total * total * (total + 1.0))

    def pdf(self, x: float) -> float:
        if x < 0 or x > 1:
            return 0.0
        return self._functions().pdf("beta", x, self.alpha, self.beta)

    def cdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        if x > 1:
            return 1.0
        return self._functions().cdf("beta", x, self.alpha, self.beta)

    def percentile(self, p: float) -> Optional[float]:
        if not self._valid_probability(p):
            return None
        return self._functions().inv("beta", p, self.alpha, self.beta)


@dataclass(frozen=True)
class LognormalDistribution(ProviderBacked, ContinuousDistribution):
    """
    Log-normal distribution: ln(X) ~ N(mu, sigma^2).

    Attributes:
        mu: Mean of the underlying normal
        sigma: Standard deviation of the underlying normal (> 0)
    """

    mu: float
    sigma: float
    provider: Optional[SpecialFunctionProvider] = field(default=None, repr=False, compare=False)

    name = "Log-normal"

    def __post_init__(self):
        self._coerce_float("mu", "sigma")
        self._require_positive("sigma", "Standard deviation σ")

    def mean(self) -> float:
        return math.exp(self.mu + (self.sigma * self.sigma) / 2.0)

    def variance(self) -> float:
        s2 = self.sigma * self.sigma
        return math.exp(2.0 * self.mu + s2) * math.expm1(s2)

    def pdf(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return self._functions().pdf("lognormal", x, self.mu, self.sigma)

    def cdf(self, x: float) -> float:
        if x <= 0:
            return 0.0
        return self._functions().cdf("lognormal", x, self.mu, self.sigma)

    def percentile(self, p: float) -> Optional[float]:
        if not self._valid_probability(p):
            return None
        return self._functions().inv("lognormal", p, self.mu, self.sigma)


@dataclass(frozen=True)
class ParetoDistribution(ContinuousDistribution):
    """
    Pareto (type I) distribution.

    Attributes:
        xm: Scale parameter, the minimum value (> 0)
        alpha: Shape parameter (> 0)

    The mean is infinite for alpha <= 1 and the variance for alpha <= 2.
    """

    xm: float
    alpha: float

    name = "Pareto"

    def __post_init__(self):
        self._coerce_float("xm", "alpha")
        self._require_positive("xm", "Scale parameter xm")
        self._require_positive("alpha", "Shape parameter α")

    def mean(self) -> float:
        if self.alpha <= 1:
            return math.inf
        return (self.alpha * self.xm) / (self.alpha - 1.0)

    def variance(self) -> float:
        if self.alpha <= 2:
            return math.inf
        a = self.alpha
        return (self.xm * self.xm * a) / ((a - 1.0) * (a - 1.0) * (a - 2.0))

    def pdf(self, x: float) -> float:
        if x < self.xm:
            return 0.0
        return (self.alpha * self.xm ** self.alpha) / x ** (self.alpha + 1.0)

    def cdf(self, x: float) -> float:
        if x < self.xm:
            return 0.0
        return 1.0 - (self.xm / x) ** self.alpha

    def percentile(self, p: float) -> Optional[float]:
        if not self._valid_probability(p):
            return None
        if p == 1.0:
            return math.inf
        return self.xm / (1.0 - p) ** (1.0 / self.alpha)


@dataclass(frozen=True)
class WeibullDistribution(ContinuousDistribution):
    """
    Weibull distribution.

    Attributes:
        lam: Scale parameter lambda (> 0)
        k: Shape parameter (> 0)

    With k = 1 this is the exponential distribution with rate 1/lam.
    """

    lam: float
    k: float

    name = "Weibull"

    def __post_init__(self):
        self._coerce_float("lam", "k")
        self._require_positive("lam", "Scale parameter λ")
        self._require_positive("k", "Shape parameter k")

    def mean(self) -> float:
        return self.lam * gamma_function(1.0 + 1.0 / self.k)

    def variance(self) -> float:
        g1 = gamma_function(1.0 + 1.0 / self.k)
        g2 = gamma_function(1.0 + 2.0 / self.k)
        return self.lam * self.lam * (g2 - g1 * g1)

    def pdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        if x == 0:
            if self.k < 1:
                return math.inf
            return 1.0 / self.lam if self.k == 1 else 0.0
        z = x / self.lam
        return (self.k / self.lam) * z ** (self.k - 1.0) * math.exp(-(z ** self.k))

    def cdf(self, x: float) -> float:
        if x < 0:
            return 0.0
        return 1.0 - math.exp(-((x / self.lam) ** self.k))

    def percentile(self, p: float) -> Optional[float]:
        if not self._valid_probability(p):
            return None
        if p == 1.0:
            return math.inf
        return self.lam * (-math.log1p(-p)) ** (1.0 / self.k)
