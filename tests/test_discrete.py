"""
Unit tests for the discrete distributions.
"""

import math
import time

import numpy as np
import pytest

from probability_calculator.core.models import (
    BinomialDistribution,
    GeometricDistribution,
    HypergeometricDistribution,
    NegativeBinomialDistribution,
    PoissonDistribution,
)
from probability_calculator.core.validation import ParameterError


class TestBinomial:
    """Tests for the binomial distribution."""

    def test_pmf_known_value(self):
        """C(10, 5) / 2^10."""
        assert BinomialDistribution(10, 0.5).pmf(5) == pytest.approx(0.24609375, abs=1e-15)

    def test_support(self):
        dist = BinomialDistribution(10, 0.3)
        assert (dist.xmin, dist.xmax) == (0, 10)
        assert dist.pmf(-1) == 0.0
        assert dist.pmf(11) == 0.0

    def test_cdf_at_upper_bound_is_exactly_one(self):
        dist = BinomialDistribution(17, 0.37)
        assert dist.cdf(17) == 1.0
        assert dist.cdf(100) == 1.0
        assert dist.cdf(-0.5) == 0.0

    def test_pmf_sums_to_one(self):
        _, masses = BinomialDistribution(30, 0.2).pmf_table()
        assert math.fsum(masses) == pytest.approx(1.0, abs=1e-12)

    def test_moments_match_pmf(self):
        """Closed-form moments agree with the mass function."""
        dist = BinomialDistribution(10, 0.3)
        closed = dist.moments()
        summed = dist.moments_from_pmf()
        assert closed.mean == pytest.approx(3.0)
        assert closed.variance == pytest.approx(2.1)
        assert summed.mean == pytest.approx(closed.mean, rel=1e-9)
        assert summed.variance == pytest.approx(closed.variance, rel=1e-9)

    def test_non_integer_arguments(self):
        """pmf is zero off the integers; cdf floors its argument."""
        dist = BinomialDistribution(8, 0.4)
        assert dist.pmf(2.5) == 0.0
        assert dist.cdf(2.7) == dist.cdf(2)
        assert dist.survival(2.5) == pytest.approx(1.0 - dist.cdf(2))

    def test_survival_and_between(self):
        dist = BinomialDistribution(12, 0.45)
        assert dist.survival(0) == 1.0
        assert dist.survival(5) == pytest.approx(1.0 - dist.cdf(4), abs=1e-12)
        expected = math.fsum(dist.pmf(k) for k in range(3, 8))
        assert dist.probability_between(3, 7) == pytest.approx(expected, abs=1e-12)

    def test_degenerate_probability(self):
        """p = 0 puts all mass at zero."""
        dist = BinomialDistribution(5, 0.0)
        assert dist.pmf(0) == 1.0
        assert dist.pmf(1) == 0.0

    def test_large_n_uses_log_space(self):
        """C(2000, 1000) overflows a float but the mass stays finite."""
        dist = BinomialDistribution(2000, 0.5)
        mass = dist.pmf(1000)
        assert mass == pytest.approx(1.0 / math.sqrt(math.pi * 1000.0), abs=1e-5)
        # symmetric about 1000, so P(X <= 1000) = (1 + P(X = 1000)) / 2
        assert dist.cdf(1000) == pytest.approx((1.0 + mass) / 2.0, rel=1e-7)

    @pytest.mark.parametrize(
        "n, p, field",
        [
            (0, 0.5, "n"),
            (-3, 0.5, "n"),
            (5.5, 0.5, "n"),
            (5, 1.5, "p"),
            (5, -0.1, "p"),
        ],
    )
    def test_invalid_parameters(self, n, p, field):
        with pytest.raises(ParameterError) as exc_info:
            BinomialDistribution(n, p)
        assert exc_info.value.field == field


class TestPoisson:
    """Tests for the Poisson distribution."""

    def test_cdf_known_value(self):
        """e^-3 (1 + 3 + 9/2)."""
        assert PoissonDistribution(3.0).cdf(2) == pytest.approx(0.42319008112684353, abs=1e-12)

    def test_unbounded_support(self):
        dist = PoissonDistribution(2.0)
        assert dist.xmax == math.inf
        with pytest.raises(ValueError):
            dist.support()

    def test_truncated_moments(self):
        dist = PoissonDistribution(4.5)
        summed = dist.moments_from_pmf(upper=100)
        assert summed.mean == pytest.approx(4.5, rel=1e-9)
        assert summed.variance == pytest.approx(4.5, rel=1e-9)

    def test_large_k_does_not_overflow(self):
        dist = PoissonDistribution(500.0)
        assert 0.0 < dist.pmf(500) < 1.0
        assert dist.pmf(5000) == 0.0 or dist.pmf(5000) < 1e-300

    def test_invalid_rate(self):
        with pytest.raises(ParameterError):
            PoissonDistribution(-1.0)


class TestGeometric:
    """Failures before the first success."""

    def test_values(self):
        dist = GeometricDistribution(0.25)
        assert dist.pmf(0) == pytest.approx(0.25)
        assert dist.pmf(2) == pytest.approx(0.75 ** 2 * 0.25)
        assert dist.cdf(2) == pytest.approx(0.578125)
        assert dist.cdf(-1) == 0.0
        assert dist.survival(0) == 1.0
        assert dist.survival(2) == pytest.approx(0.5625)

    def test_closed_form_cdf_matches_sum(self):
        dist = GeometricDistribution(0.3)
        for k in range(10):
            summed = math.fsum(dist.pmf(i) for i in range(k + 1))
            assert dist.cdf(k) == pytest.approx(summed, abs=1e-12)

    def test_moments(self):
        dist = GeometricDistribution(0.25)
        assert dist.mean() == pytest.approx(3.0)
        assert dist.variance() == pytest.approx(12.0)

    @pytest.mark.parametrize("p", [0.0, 1.0, 1.2])
    def test_probability_must_be_open_interval(self, p):
        with pytest.raises(ParameterError):
            GeometricDistribution(p)


class TestHypergeometric:
    """Draws without replacement."""

    def test_support_bounds(self):
        dist = HypergeometricDistribution(20, 7, 15)
        assert (dist.xmin, dist.xmax) == (2, 7)
        assert dist.pmf(1) == 0.0
        assert dist.cdf(1) == 0.0
        assert dist.cdf(7) == 1.0

    def test_moments_match_pmf(self):
        dist = HypergeometricDistribution(20, 7, 5)
        summed = dist.moments_from_pmf()
        assert dist.mean() == pytest.approx(1.75)
        assert summed.mean == pytest.approx(dist.mean(), rel=1e-9)
        assert summed.variance == pytest.approx(dist.variance(), rel=1e-9)

    def test_pmf_sums_to_one(self):
        xs, masses = HypergeometricDistribution(50, 20, 12).pmf_table()
        assert xs[0] == 0 and xs[-1] == 12
        assert np.sum(masses) == pytest.approx(1.0, abs=1e-12)

    @pytest.mark.parametrize(
        "N, M, n, field",
        [
            (0, 0, 1, "N"),
            (10, 11, 3, "M"),
            (10, -1, 3, "M"),
            (10, 5, 11, "n"),
            (10, 5, 0, "n"),
        ],
    )
    def test_invalid_parameters(self, N, M, n, field):
        with pytest.raises(ParameterError) as exc_info:
            HypergeometricDistribution(N, M, n)
        assert exc_info.value.field == field


class TestNegativeBinomial:
    """Failures before the r-th success."""

    def test_values(self):
        dist = NegativeBinomialDistribution(3, 0.5)
        assert dist.pmf(0) == pytest.approx(0.125)
        assert dist.pmf(2) == pytest.approx(0.1875)

    def test_moments(self):
        dist = NegativeBinomialDistribution(3, 0.5)
        assert dist.mean() == pytest.approx(3.0)
        assert dist.variance() == pytest.approx(6.0)
        summed = dist.moments_from_pmf(upper=300)
        assert summed.mean == pytest.approx(3.0, rel=1e-9)
        assert summed.variance == pytest.approx(6.0, rel=1e-9)

    def test_geometric_special_case(self):
        """r = 1 is the geometric distribution."""
        nb = NegativeBinomialDistribution(1, 0.4)
        geo = GeometricDistribution(0.4)
        for k in range(8):
            assert nb.pmf(k) == pytest.approx(geo.pmf(k), rel=1e-12)

    def test_invalid_parameters(self):
        with pytest.raises(ParameterError):
            NegativeBinomialDistribution(0, 0.5)
        with pytest.raises(ParameterError):
            NegativeBinomialDistribution(2, 1.0)


class TestLargeArguments:
    """Summed cdfs stay fast for large counts and supports."""

    def test_poisson_far_tail(self):
        start = time.perf_counter()
        assert PoissonDistribution(3.0).cdf(20000) == pytest.approx(1.0, abs=1e-12)
        assert time.perf_counter() - start < 2.0

    def test_binomial_large_n(self):
        dist = BinomialDistribution(20000, 0.5)
        start = time.perf_counter()
        value = dist.cdf(10000)
        assert time.perf_counter() - start < 2.0
        assert value == pytest.approx((1.0 + dist.pmf(10000)) / 2.0, rel=1e-7)
        assert value == pytest.approx(0.5028, abs=1e-4)

    def test_negative_binomial_log_space(self):
        dist = NegativeBinomialDistribution(5, 0.01)
        start = time.perf_counter()
        assert dist.cdf(5000) == pytest.approx(1.0, abs=1e-6)
        assert time.perf_counter() - start < 2.0

    def test_hypergeometric_large_population(self):
        dist = HypergeometricDistribution(100000, 50000, 1000)
        start = time.perf_counter()
        summed = dist.moments_from_pmf()
        assert time.perf_counter() - start < 2.0
        assert summed.mean == pytest.approx(dist.mean(), rel=1e-9)
        assert summed.variance == pytest.approx(dist.variance(), rel=1e-6)
