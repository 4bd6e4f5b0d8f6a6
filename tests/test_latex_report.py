"""
Tests for LaTeX rendering of calculation results.
"""

import math

import pytest

from probability_calculator.core.calculator import CalculationRequest, calculate
from probability_calculator.core.models import CalculatorOptions, Moments
from probability_calculator.core.reports import (
    format_moments_latex,
    format_number_for_latex,
    render_latex_report,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.5, "0.5000"),
        (0.0, "0.0000"),
        (0.001, "0.0010"),
        (999.5, "999.5000"),
        (1000.0, r"1.0000 \times 10^{3}"),
        (12345.678, r"1.2346 \times 10^{4}"),
        (0.0001234, r"1.2340 \times 10^{-4}"),
        (-0.0001234, r"-1.2340 \times 10^{-4}"),
        (math.inf, r"\infty"),
        (-math.inf, r"-\infty"),
        (math.nan, r"\text{NaN}"),
        (None, r"\text{undefined}"),
    ],
)
def test_format_number_for_latex(value, expected):
    assert format_number_for_latex(value) == expected


def test_format_number_for_latex_digits():
    assert format_number_for_latex(0.24609375, digits=2) == "0.25"
    assert format_number_for_latex(3, digits=0) == "3"


def test_format_moments_latex():
    text = format_moments_latex(Moments(mean=5.0, variance=2.5, sd=math.sqrt(2.5)), "Binomial")
    lines = text.splitlines()
    assert lines[0] == "Binomial Distribution Properties:"
    assert lines[1] == r"$$\mu = E(X) = 5.0000$$"
    assert lines[2] == r"$$\sigma^2 = Var(X) = 2.5000$$"
    assert lines[3] == r"$$\sigma = SD(X) = 1.5811$$"


def test_format_moments_latex_infinite_mean():
    text = format_moments_latex(Moments(mean=math.inf, variance=math.inf, sd=math.inf), "Pareto")
    assert r"$$\mu = E(X) = \infty$$" in text


class TestRenderReport:
    """Full reports for calculated results."""

    def test_discrete_exact(self):
        result = calculate(CalculationRequest("binomial exact", {"n": 10, "p": 0.5, "x": 5}))
        lines = render_latex_report(result).splitlines()
        assert lines[0] == "Binomial: binomial exact"
        assert r"$$P(X = 5) = 0.2461$$" in lines
        assert r"$$X \in [0, 10]$$" in lines
        assert r"$$\mu = E(X) = 5.0000$$" in lines

    def test_digits_from_options(self):
        result = calculate(CalculationRequest("binomial exact", {"n": 10, "p": 0.5, "x": 5}))
        text = render_latex_report(result, CalculatorOptions(latex_digits=2))
        assert r"$$P(X = 5) = 0.25$$" in text

    def test_discrete_between_and_unbounded_support(self):
        result = calculate(CalculationRequest("poisson between", {"lambda": 3, "x1": 1, "x2": 4}))
        text = render_latex_report(result)
        assert r"P(1 \leq X \leq 4)" in text
        assert r"$$X \in [0, \infty]$$" in text

    def test_continuous_between(self):
        result = calculate(
            CalculationRequest("normal between", {"mu": 0, "sigma": 1, "x1": -1, "x2": 1})
        )
        text = render_latex_report(result)
        assert r"$$P(-1.0000 < X \leq 1.0000) = 0.6827$$" in text
        assert r"\in" not in text

    def test_percentile(self):
        result = calculate(CalculationRequest("exponential percentile", {"lambda": 2, "percent": 50}))
        text = render_latex_report(result)
        assert r"$$x_{0.5000} = 0.3466$$" in text
        assert r"$$P(X \leq 0.3466) = 0.5000$$" in text

    def test_mann_whitney_rank_sum_line(self):
        result = calculate(CalculationRequest("mann-whitney exact", {"n1": 3, "n2": 3, "u": 0}))
        text = render_latex_report(result)
        assert r"$$P(U = 0) = 0.0500$$" in text
        assert r"$$W = U + \frac{n_1(n_1+1)}{2} = 6$$" in text
        assert r"$$U \in [0, 9]$$" in text

    def test_rank_sum_u_line(self):
        result = calculate(
            CalculationRequest("wilcoxon-rank-sum greater-equal", {"n1": 3, "n2": 3, "w": 15})
        )
        text = render_latex_report(result)
        assert r"$$P(W \geq 15) = 0.0500$$" in text
        assert r"$$U = W - \frac{n_1(n_1+1)}{2} = 9$$" in text

    def test_critical_values(self):
        result = calculate(CalculationRequest("z critical", {"alpha": 0.05}))
        lines = render_latex_report(result).splitlines()
        assert lines[0] == "Standard Normal (z): z critical"
        assert r"$$z_{\text{two-tail}} = 1.9600$$" in lines
        assert r"$$z_{\text{right}} = 1.6449$$" in lines

    def test_chi_square_critical_with_degrees_of_freedom(self):
        result = calculate(CalculationRequest("chi-square critical", {"alpha": 0.05, "df": 10}))
        text = render_latex_report(result)
        assert r"$$\chi^2_{\text{right}} = 18.3070$$" in text
        assert r"$$\text{df} = 10$$" in text
