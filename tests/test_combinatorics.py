import math

import pytest

from probability_calculator.core.statistics.combinatorics import (
    combination,
    factorial,
    gamma_function,
    log_factorial,
)


@pytest.mark.parametrize(
    "n, expected",
    [
        (0, 1),
        (1, 1),
        (5, 120),
        (20, 2432902008176640000),
        (5.0, 120),
    ],
)
def test_factorial_exact(n, expected):
    assert factorial(n) == expected
    assert isinstance(factorial(n), int)


@pytest.mark.parametrize("bad", [-1, 2.5, float("inf"), "3", True])
def test_factorial_rejects_non_integers(bad):
    with pytest.raises(ValueError):
        factorial(bad)


def test_factorial_is_exact_beyond_float_precision():
    # 25! has more significant digits than a double holds
    assert factorial(25) == 15511210043330985984000000


@pytest.mark.parametrize("n", [0, 1, 2, 10, 50])
def test_log_factorial_matches_log_of_factorial(n):
    assert log_factorial(n) == pytest.approx(math.log(factorial(n)), abs=1e-9)


def test_log_factorial_large_argument_is_finite():
    assert log_factorial(5000) == pytest.approx(math.lgamma(5001), rel=1e-12)


@pytest.mark.parametrize(
    "n, k, expected",
    [
        (10, 3, 120),
        (52, 5, 2598960),
        (7, 0, 1),
        (7, 7, 1),
        (0, 0, 1),
        (3, 5, 0),
        (4, -1, 0),
    ],
)
def test_combination_values(n, k, expected):
    assert combination(n, k) == expected


def test_combination_symmetry():
    for k in range(0, 21):
        assert combination(20, k) == combination(20, 20 - k)


@pytest.mark.parametrize(
    "z, expected",
    [
        (1.0, 1.0),
        (2.0, 1.0),
        (5.0, 24.0),
        (0.5, math.sqrt(math.pi)),
        (1.5, math.sqrt(math.pi) / 2.0),
        (4.5, 11.631728396567448),
        (-0.5, -2.0 * math.sqrt(math.pi)),
        (20.0, 121645100408832000.0),
    ],
)
def test_gamma_function_known_values(z, expected):
    assert gamma_function(z) == pytest.approx(expected, rel=1e-10)


@pytest.mark.parametrize("z", [0.3, 1.25, 2.7, 7.1, 12.5])
def test_gamma_function_agrees_with_lgamma(z):
    assert gamma_function(z) == pytest.approx(math.exp(math.lgamma(z)), rel=1e-10)


@pytest.mark.parametrize("pole", [0, -1, -2.0])
def test_gamma_function_poles(pole):
    with pytest.raises(ValueError):
        gamma_function(pole)
