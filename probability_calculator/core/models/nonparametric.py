"""
Null distributions of nonparametric rank tests.

Implemented:
- Wilcoxon signed-rank W for n matched pairs
- Mann-Whitney U for two independent samples of sizes n1, n2
- Wilcoxon rank-sum W, the Mann-Whitney U shifted by n1(n1+1)/2
- Wald-Wolfowitz runs test R for n1 symbols of one kind and n2 of the other

Each test is a DiscreteDistribution over its statistic, so it shares the
pmf/cdf/survival contract of the parametric families. The signed-rank and
Mann-Whitney masses are exact rationals built from the rank-count tables.

The rank-sum cdf switches to a continuity-corrected normal approximation
once either sample is larger than ``exact_limit`` (8 by default).
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from .base import DiscreteDistribution, ProviderBacked
from ..statistics.combinatorics import combination
from ..statistics.provider import SpecialFunctionProvider
from ..statistics.rank_counts import mann_whitney_counts, signed_rank_counts
from ..validation.parameters import ParameterError

logger = logging.getLogger(__name__)

DEFAULT_EXACT_LIMIT = 8


def _check_sample_size(dist, name: str, minimum: int) -> None:
    value = getattr(dist, name)
    if value < minimum:
        kind = "a non-negative" if minimum == 0 else "a positive"
        raise ParameterError(name, f"Sample size {name} must be {kind} integer")


@dataclass(frozen=True)
class WilcoxonSignedRank(DiscreteDistribution):
    """
    Wilcoxon signed-rank statistic W for n matched pairs.

    Attributes:
        n: Number of pairs (positive integer)

    Support: [0, n(n+1)/2]; P(W = x) = cnum(x, n) / 2^n.
    """

    n: int

    name = "Wilcoxon Signed Rank"

    def __post_init__(self):
        self._coerce_int("n")
        _check_sample_size(self, "n", 1)
        self._set_support(0, self.n * (self.n + 1) // 2)

    def mean(self) -> float:
        return self.n * (self.n + 1) / 4.0

    def variance(self) -> float:
        return self.n * (self.n + 1) * (2 * self.n + 1) / 24.0

    def _mass(self, k: int) -> float:
        return signed_rank_counts(self.n)[k] / 2 ** self.n


@dataclass(frozen=True)
class MannWhitneyU(DiscreteDistribution):
    """
    Mann-Whitney U statistic for two independent samples.

    Attributes:
        n1: Size of the first sample (positive integer)
        n2: Size of the second sample (positive integer)

    Support: [0, n1*n2]; P(U = u) = fnum(u, n1, n2) / C(n1+n2, n1).
    """

    n1: int
    n2: int

    name = "Mann-Whitney U"

    def __post_init__(self):
        self._coerce_int("n1", "n2")
        _check_sample_size(self, "n1", 1)
        _check_sample_size(self, "n2", 1)
        self._set_support(0, self.n1 * self.n2)

    def mean(self) -> float:
        return self.n1 * self.n2 / 2.0

    def variance(self) -> float:
        return self.n1 * self.n2 * (self.n1 + self.n2 + 1) / 12.0

    def _mass(self, k: int) -> float:
        return mann_whitney_counts(self.n1, self.n2)[k] / combination(self.n1 + self.n2, self.n1)

    def u_to_rank_sum(self, u: float) -> float:
        """Rank sum of the first sample for a given U."""
        return u + self.n1 * (self.n1 + 1) // 2

    def rank_sum_to_u(self, w: float) -> float:
        """U for a given rank sum of the first sample."""
        return w - self.n1 * (self.n1 + 1) // 2


@dataclass(frozen=True)
class WilcoxonRankSum(ProviderBacked, DiscreteDistribution):
    """
    Wilcoxon rank-sum statistic W (rank sum of the first sample).

    Attributes:
        n1: Size of the first sample (positive integer)
        n2: Size of the second sample (positive integer)
        exact_limit: Largest sample size for which the cdf is summed exactly
        provider: Special-function provider for the normal approximation

    W = U + n1(n1+1)/2, so the mass function is that of MannWhitneyU on the
    shifted support [n1(n1+1)/2, n1(n1+2n2+1)/2].
    """

    n1: int
    n2: int
    exact_limit: int = field(default=DEFAULT_EXACT_LIMIT, compare=False)
    provider: Optional[SpecialFunctionProvider] = field(default=None, repr=False, compare=False)
    _mann_whitney: MannWhitneyU = field(init=False, repr=False, compare=False)

    name = "Wilcoxon Rank Sum"

    def __post_init__(self):
        self._coerce_int("n1", "n2", "exact_limit")
        _check_sample_size(self, "n1", 1)
        _check_sample_size(self, "n2", 1)
        self._set("_mann_whitney", MannWhitneyU(self.n1, self.n2))
        self._set_support(
            self.n1 * (self.n1 + 1) // 2,
            self.n1 * (self.n1 + 2 * self.n2 + 1) // 2,
        )

    @property
    def total(self) -> int:
        return self.n1 + self.n2

    @property
    def uses_normal_approximation(self) -> bool:
        return self.n1 > self.exact_limit or self.n2 > self.exact_limit

    def mean(self) -> float:
        return self.n1 * (self.total + 1) / 2.0

    def variance(self) -> float:
        return self.n1 * self.n2 * (self.total + 1) / 12.0

    def _mass(self, k: int) -> float:
        return self._mann_whitney.pmf(self._mann_whitney.rank_sum_to_u(k))

    def cdf(self, x: float) -> float:
        """P(W <= x), exact or continuity-corrected normal."""
        if not self.uses_normal_approximation:
            return super().cdf(x)
        if x < self.xmin:
            return 0.0
        if x >= self.xmax:
            return 1.0
        logger.debug(
            "Rank-sum cdf for n1=%d, n2=%d uses the normal approximation", self.n1, self.n2
        )
        z = (math.floor(x) + 0.5 - self.mean()) / self.sd()
        return self._functions().cdf("normal", z, 0.0, 1.0)

    def mann_whitney_u(self, w: float) -> float:
        """Mann-Whitney U equivalent of rank sum w."""
        return self._mann_whitney.rank_sum_to_u(w)


@dataclass(frozen=True)
class RunsTest(DiscreteDistribution):
    """
    Number of runs R in a random arrangement of n1 + n2 symbols.

    Attributes:
        n1: Count of the first symbol (non-negative integer)
        n2: Count of the second symbol (non-negative integer)

    Support:
        n1 = 0 or n2 = 0:  [1, 1]  (a single run, probability 1)
        n1 != n2:          [2, 2 min(n1, n2) + 2]
        n1 == n2:          [2, 2 min(n1, n2) + 1]
    """

    n1: int
    n2: int

    name = "Runs Test"

    def __post_init__(self):
        self._coerce_int("n1", "n2")
        _check_sample_size(self, "n1", 0)
        _check_sample_size(self, "n2", 0)
        if self.degenerate:
            self._set_support(1, 1)
        elif self.n1 != self.n2:
            self._set_support(2, 2 * min(self.n1, self.n2) + 2)
        else:
            self._set_support(2, 2 * min(self.n1, self.n2) + 1)

    @property
    def degenerate(self) -> bool:
        return self.n1 == 0 or self.n2 == 0

    def mean(self) -> float:
        if self.degenerate:
            return 1.0
        return 2.0 * self.n1 * self.n2 / (self.n1 + self.n2) + 1.0

    def variance(self) -> float:
        if self.degenerate:
            return 0.0
        n1, n2 = self.n1, self.n2
        total = n1 + n2
        return (2.0 * n1 * n2 * (2 * n1 * n2 - n1 - n2)) / (total * total * (total - 1))

    def _mass(self, k: int) -> float:
        if self.degenerate:
            return 1.0
        n1, n2 = self.n1, self.n2
        arrangements = combination(n1 + n2, n1)
        if k % 2 == 0:
            half = k // 2 - 1
            return 2 * combination(n1 - 1, half) * combination(n2 - 1, half) / arrangements
        half = (k - 1) // 2
        count = (
            combination(n1 - 1, half) * combination(n2 - 1, half - 1)
            + combination(n2 - 1, half) * combination(n1 - 1, half - 1)
        )
        return count / arrangements
