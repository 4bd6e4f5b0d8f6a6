import pytest

from probability_calculator.core.calculator import (
    chi_square_critical,
    chi_square_p_value,
    f_critical,
    f_p_value,
    t_critical,
    t_p_value,
    z_critical,
    z_p_value,
)
from probability_calculator.core.calculator.critical_values import critical_values, p_values
from probability_calculator.core.validation import ParameterError


def test_z_critical_values():
    values = z_critical(0.05)
    assert values["right"] == pytest.approx(1.6448536269514722, abs=1e-9)
    assert values["left"] == pytest.approx(-1.6448536269514722, abs=1e-9)
    assert values["two-tail"] == pytest.approx(1.959963984540054, abs=1e-9)


def test_t_critical_values():
    values = t_critical(0.05, 10)
    assert set(values) == {"right", "left", "two-tail"}
    assert values["right"] == pytest.approx(1.8124611228107335, abs=1e-9)
    assert values["left"] == pytest.approx(-values["right"], abs=1e-12)
    assert values["two-tail"] == pytest.approx(2.2281388519649385, abs=1e-9)


@pytest.mark.parametrize(
    "alpha, df, expected",
    [
        (0.05, 1, 3.841458820694124),
        (0.05, 10, 18.307038053275146),
        (0.01, 2, 9.21034037197618),
    ],
)
def test_chi_square_critical(alpha, df, expected):
    assert chi_square_critical(alpha, df) == {"right": pytest.approx(expected, abs=1e-8)}


def test_f_critical():
    values = f_critical(0.05, 5, 10)
    assert list(values) == ["right"]
    assert values["right"] == pytest.approx(3.3258, abs=1e-4)


def test_z_p_value_is_symmetric():
    positive = z_p_value(1.96)
    negative = z_p_value(-1.96)
    assert positive["single-tail"] == pytest.approx(0.0249978951482205, abs=1e-12)
    assert positive["double-tail"] == pytest.approx(2.0 * positive["single-tail"])
    assert negative == positive


def test_t_p_value_inverts_critical_value():
    critical = t_critical(0.05, 10)["two-tail"]
    assert t_p_value(critical, 10)["double-tail"] == pytest.approx(0.05, abs=1e-9)
    assert t_p_value(-critical, 10)["single-tail"] == pytest.approx(0.025, abs=1e-9)


def test_right_tail_p_values_invert_critical_values():
    chi2 = chi_square_critical(0.05, 10)["right"]
    assert chi_square_p_value(chi2, 10) == {"right-tail": pytest.approx(0.05, abs=1e-9)}
    f = f_critical(0.05, 5, 10)["right"]
    assert f_p_value(f, 5, 10)["right-tail"] == pytest.approx(0.05, abs=1e-9)


def test_zero_statistic_has_p_value_one():
    assert chi_square_p_value(0.0, 3)["right-tail"] == pytest.approx(1.0)
    assert f_p_value(0.0, 2, 7)["right-tail"] == pytest.approx(1.0)


@pytest.mark.parametrize(
    "call, field",
    [
        (lambda: z_critical(0.0), "alpha"),
        (lambda: z_critical(1.0), "alpha"),
        (lambda: t_critical(1.5, 10), "alpha"),
        (lambda: t_critical(0.05, 0), "df"),
        (lambda: t_critical(0.05, 2.5), "df"),
        (lambda: chi_square_critical(0.05, -3), "df"),
        (lambda: f_critical(0.05, 0, 3), "df1"),
        (lambda: f_critical(0.05, 3, 0), "df2"),
        (lambda: chi_square_p_value(-1.0, 3), "chi2"),
        (lambda: f_p_value(-0.1, 1, 1), "f"),
        (lambda: t_p_value(2.0, 0), "df"),
    ],
)
def test_invalid_arguments(call, field):
    with pytest.raises(ParameterError) as exc_info:
        call()
    assert exc_info.value.field == field


def test_critical_values_from_request_parameters():
    answer = critical_values("t", {"alpha": "0.05", "df": "10"})
    assert answer["parameters"] == {"df": 10}
    assert answer["arguments"] == {"alpha": 0.05}
    assert answer["values"]["two-tail"] == pytest.approx(2.2281388519649385, abs=1e-9)


def test_p_values_from_request_parameters():
    answer = p_values("f", {"f": 3.0, "df1": 5, "df2": 10})
    assert answer["parameters"] == {"df1": 5, "df2": 10}
    assert answer["arguments"] == {"f": 3.0}
    assert 0.0 < answer["values"]["right-tail"] < 0.1


def test_missing_degrees_of_freedom():
    with pytest.raises(ParameterError) as exc_info:
        p_values("chi-square", {"chi2": 4.2})
    assert exc_info.value.field == "df"
    assert str(exc_info.value) == "Please enter a value for df"
