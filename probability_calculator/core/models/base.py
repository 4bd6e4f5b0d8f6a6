"""
Base classes for probability distributions and test statistics.

Conventions:
- Every distribution is an immutable (frozen) dataclass; parameters are
  validated in ``__post_init__`` and never change afterwards
- Queries (pdf/pmf, cdf, percentile) return plain floats and recompute from
  the parameters on every call
- Discrete supports are inclusive integer ranges [xmin, xmax]; xmax may be
  ``math.inf`` for unbounded families
- Percentile requests outside [0, 1] return ``None`` rather than raising
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..statistics.provider import SpecialFunctionProvider, get_provider
from ..validation.parameters import ParameterError, is_integer


@dataclass(frozen=True)
class Moments:
    """
    Mean, variance and standard deviation of a distribution.

    Attributes:
        mean: Expected value E(X)
        variance: Var(X)
        sd: Standard deviation sqrt(Var(X))
    """

    mean: float
    variance: float
    sd: float

    def to_dict(self) -> Dict[str, float]:
        """Serialize moments to dictionary."""
        return {
            "mean": self.mean,
            "variance": self.variance,
            "sd": self.sd,
        }


class Distribution(ABC):
    """
    Capability set shared by every distribution and test statistic.

    Subclasses provide ``mean`` and ``variance``; ``sd`` and ``moments``
    derive from them.
    """

    name = "Distribution"

    @abstractmethod
    def mean(self) -> float:
        """Expected value."""

    @abstractmethod
    def variance(self) -> float:
        """Variance."""

    def sd(self) -> float:
        """Standard deviation (inf when the variance is infinite)."""
        return math.sqrt(self.variance())

    def moments(self) -> Moments:
        """Closed-form moments as a :class:`Moments` record."""
        return Moments(mean=self.mean(), variance=self.variance(), sd=self.sd())

    def parameters(self) -> Dict[str, Any]:
        """Constructor parameters by name."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.init and f.compare}

    # Validation helpers used from __post_init__
    def _set(self, name: str, value: Any) -> None:
        object.__setattr__(self, name, value)

    def _coerce_float(self, *names: str) -> None:
        for name in names:
            value = getattr(self, name)
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise ParameterError(name, f"{name} must be a number, got {value!r}") from None
            if not math.isfinite(value):
                raise ParameterError(name, f"{name} must be finite, got {value!r}")
            self._set(name, value)

    def _coerce_int(self, *names: str) -> None:
        for name in names:
            value = getattr(self, name)
            try:
                ok = is_integer(float(value))
            except (TypeError, ValueError):
                ok = False
            if not ok:
                raise ParameterError(name, f"{name} must be an integer, got {value!r}")
            self._set(name, int(value))

    def _require_positive(self, name: str, label: str) -> None:
        if getattr(self, name) <= 0:
            raise ParameterError(name, f"{label} must be positive")


class ProviderBacked:
    """Mixin resolving the special-function provider for a query.

    Classes using it declare a ``provider`` field; ``None`` means the
    process-wide provider from :func:`get_provider`.
    """

    provider: Optional[SpecialFunctionProvider]

    def _functions(self) -> SpecialFunctionProvider:
        if self.provider is not None:
            return self.provider.load()
        return get_provider()


@dataclass(frozen=True)
class ContinuousDistribution(Distribution):
    """
    Continuous distribution: density, cumulative and inverse-cumulative.

    ``percentile(p)`` is the left-inverse of ``cdf``.
    """

    @abstractmethod
    def pdf(self, x: float) -> float:
        """Probability density at x."""

    @abstractmethod
    def cdf(self, x: float) -> float:
        """P(X <= x)."""

    @abstractmethod
    def percentile(self, p: float) -> Optional[float]:
        """x such that cdf(x) = p; None when p is outside [0, 1]."""

    def survival(self, x: float) -> float:
        """P(X > x)."""
        return 1.0 - self.cdf(x)

    def probability_between(self, x1: float, x2: float) -> float:
        """P(x1 < X <= x2)."""
        return self.cdf(x2) - self.cdf(x1)

    def cdf_array(self, xs) -> np.ndarray:
        """Vector of cdf values for an array-like of points."""
        values = np.asarray(xs, dtype=float)
        return np.array([self.cdf(float(x)) for x in values.ravel()]).reshape(values.shape)

    @staticmethod
    def _valid_probability(p: Optional[float]) -> bool:
        return p is not None and not math.isnan(p) and 0.0 <= p <= 1.0


@dataclass(frozen=True)
class DiscreteDistribution(Distribution):
    """
    Discrete distribution over the integers in [xmin, xmax].

    Subclasses set the support in ``__post_init__`` (via ``_set_support``)
    and implement ``_mass(k)`` for integers k inside the support. The
    cumulative function sums the mass from ``xmin`` and is clamped to
    [0, 1]; at or above a finite ``xmax`` it is exactly 1.
    """

    xmin: float = field(init=False, default=0, repr=False, compare=False)
    xmax: float = field(init=False, default=math.inf, repr=False, compare=False)

    def _set_support(self, xmin: float, xmax: float) -> None:
        self._set("xmin", xmin)
        self._set("xmax", xmax)

    @abstractmethod
    def _mass(self, k: int) -> float:
        """Probability mass at integer k, xmin <= k <= xmax."""

    def in_support(self, x: float) -> bool:
        return is_integer(x) and self.xmin <= x <= self.xmax

    def pmf(self, x: float) -> float:
        """P(X = x); zero outside the support and for non-integers."""
        if not self.in_support(x):
            return 0.0
        return float(self._mass(int(x)))

    def cdf(self, x: float) -> float:
        """P(X <= x)."""
        if x < self.xmin:
            return 0.0
        if x >= self.xmax:
            return 1.0
        k = int(math.floor(x))
        total = math.fsum(self._mass(i) for i in range(int(self.xmin), k + 1))
        return float(np.clip(total, 0.0, 1.0))

    def survival(self, x: float) -> float:
        """P(X >= x)."""
        k = math.ceil(x) if math.isfinite(x) else x
        if k <= self.xmin:
            return 1.0
        return float(np.clip(1.0 - self.cdf(k - 1), 0.0, 1.0))

    def probability_between(self, x1: float, x2: float) -> float:
        """P(x1 <= X <= x2)."""
        k1 = math.ceil(x1) if math.isfinite(x1) else x1
        lower = self.cdf(k1 - 1) if k1 > self.xmin else 0.0
        return float(np.clip(self.cdf(x2) - lower, 0.0, 1.0))

    def support(self, upper: Optional[int] = None) -> np.ndarray:
        """Integer support as an array, truncated at ``upper`` if unbounded."""
        top = self.xmax if upper is None else min(self.xmax, upper)
        if math.isinf(top):
            raise ValueError("support is unbounded; pass an upper limit")
        return np.arange(int(self.xmin), int(top) + 1)

    def pmf_table(self, upper: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
        """(support values, masses) over the (possibly truncated) support."""
        xs = self.support(upper)
        return xs, np.array([self._mass(int(k)) for k in xs], dtype=float)

    def moments_from_pmf(self, upper: Optional[int] = None) -> Moments:
        """Moments computed by summing over the mass function.

        Serves as a consistency check on the closed-form ``moments()``.
        """
        xs, ps = self.pmf_table(upper)
        mean = float(np.sum(xs * ps))
        variance = float(np.sum((xs - mean) ** 2 * ps))
        return Moments(mean=mean, variance=variance, sd=math.sqrt(variance))
