"""
Tests for plain-text rendering of calculation results.
"""

import math

import pytest

from probability_calculator.core.calculator import CalculationRequest, calculate
from probability_calculator.core.models import CalculatorOptions
from probability_calculator.core.reports import format_number, render_text_report


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.24609375, "0.246094"),
        (0.0, "0.000000"),
        (12345.678, "12345.678000"),
        (math.inf, "inf"),
        (-math.inf, "-inf"),
        (math.nan, "nan"),
        (None, "undefined"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_number_digits():
    assert format_number(2, digits=2) == "2.00"
    assert format_number(0.5, digits=0) == "0"


class TestRenderTextReport:
    """Full plain-text reports for calculated results."""

    def test_discrete_exact(self):
        result = calculate(CalculationRequest("binomial exact", {"n": 10, "p": 0.5, "x": 5}))
        assert render_text_report(result).splitlines() == [
            "Binomial: binomial exact",
            "P(X = 5) = 0.246094",
            "X in [0, 10]",
            "mean = 5.000000",
            "variance = 2.500000",
            "sd = 1.581139",
        ]

    def test_plain_digits_from_options(self):
        """plain_digits controls every fixed-point value."""
        result = calculate(CalculationRequest("binomial exact", {"n": 10, "p": 0.5, "x": 5}))
        text = render_text_report(result, CalculatorOptions(plain_digits=2))
        assert "P(X = 5) = 0.25" in text.splitlines()
        assert "sd = 1.58" in text.splitlines()

    def test_discrete_between_and_unbounded_support(self):
        result = calculate(CalculationRequest("poisson between", {"lambda": 3, "x1": 1, "x2": 4}))
        lines = render_text_report(result).splitlines()
        assert lines[1].startswith("P(1 <= X <= 4) = ")
        assert "X in [0, inf]" in lines

    def test_continuous_between(self):
        result = calculate(
            CalculationRequest("normal between", {"mu": 0, "sigma": 1, "x1": -1, "x2": 1})
        )
        lines = render_text_report(result, CalculatorOptions(plain_digits=4)).splitlines()
        assert "P(-1.0000 < X <= 1.0000) = 0.6827" in lines
        assert not any(" in [" in line for line in lines)

    def test_percentile(self):
        result = calculate(CalculationRequest("exponential percentile", {"lambda": 2, "percent": 50}))
        assert "x_0.500000 = 0.346574" in render_text_report(result).splitlines()

    def test_mann_whitney_rank_sum(self):
        result = calculate(CalculationRequest("mann-whitney exact", {"n1": 3, "n2": 3, "u": 0}))
        lines = render_text_report(result).splitlines()
        assert "P(U = 0) = 0.050000" in lines
        assert "rank_sum = 6" in lines
        assert "U in [0, 9]" in lines

    def test_critical_values(self):
        result = calculate(CalculationRequest("z critical", {"alpha": 0.05}))
        lines = render_text_report(result, CalculatorOptions(plain_digits=4)).splitlines()
        assert lines[0] == "Standard Normal (z): z critical"
        assert "z (two-tail) = 1.9600" in lines
        assert "z (right) = 1.6449" in lines

    def test_chi_square_symbol_and_degrees_of_freedom(self):
        result = calculate(CalculationRequest("chi-square critical", {"alpha": 0.05, "df": 10}))
        lines = render_text_report(result, CalculatorOptions(plain_digits=3)).splitlines()
        assert "chi2 (right) = 18.307" in lines
        assert "df = 10" in lines
