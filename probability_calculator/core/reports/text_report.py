"""Plain-text rendering of calculation results.

One ``name = value`` style line per fact, suitable for a terminal:

    Binomial: binomial exact
    P(X = 5) = 0.246094
    X in [0, 10]
    mean = 5.000000
    variance = 2.500000
    sd = 1.581139

Probabilities and moments use ``plain_digits`` fixed-point decimals;
integer arguments print as integers.
"""

from __future__ import annotations

import math
from typing import Optional

from ..models.options import CalculatorOptions
from ..results.calculation_result import CalculationResult

# statistic symbols stored in LaTeX form
_PLAIN_SYMBOLS = {"\\chi^2": "chi2"}


def format_number(value: float, digits: int = 6) -> str:
    """Fixed-point plain-text formatting."""
    if value is None:
        return "undefined"
    value = float(value)
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return f"{value:.{digits}f}"


def _arg(value, digits: int) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return format_number(value, digits)


def _probability_text(result: CalculationResult, digits: int) -> str:
    v = result.variable
    args = result.arguments

    if result.query == "between":
        x1, x2 = _arg(args["x1"], digits), _arg(args["x2"], digits)
        low = "<=" if result.support is not None else "<"
        return f"P({x1} {low} {v} <= {x2})"

    x = _arg(next(iter(args.values())), digits)
    relation = {
        "exact": "=",
        "less-equal": "<=",
        "less-than": "<=",
        "greater-equal": ">=",
        "greater-than": ">",
    }.get(result.query)
    if relation is None:
        return f"f({x})"
    return f"P({v} {relation} {x})"


def render_text_report(
    result: CalculationResult,
    options: Optional[CalculatorOptions] = None,
) -> str:
    """Render a :class:`CalculationResult` as plain-text lines."""
    digits = (options or CalculatorOptions.default()).plain_digits
    fmt = lambda v: format_number(v, digits)  # noqa: E731

    lines = [f"{result.family}: {result.operation}"]

    if result.query in ("critical", "p-value"):
        symbol = _PLAIN_SYMBOLS.get(result.variable, result.variable)
        for name, value in result.values.items():
            lines.append(f"{symbol} ({name}) = {fmt(value)}")
        for key, value in result.parameters.items():
            lines.append(f"{key} = {value}")
        return "\n".join(lines)

    if result.query == "percentile":
        p = result.arguments["p"]
        lines.append(f"x_{fmt(p)} = {fmt(result.value)}")
    else:
        lines.append(f"{_probability_text(result, digits)} = {fmt(result.value)}")

    for key in ("rank_sum", "mann_whitney_u"):
        if key in result.extras:
            lines.append(f"{key} = {_arg(result.extras[key], digits)}")

    if result.support is not None:
        low, high = result.support
        lines.append(f"{result.variable} in [{_arg(low, digits)}, {_arg(high, digits)}]")

    if result.moments is not None:
        lines.append(f"mean = {fmt(result.moments.mean)}")
        lines.append(f"variance = {fmt(result.moments.variance)}")
        lines.append(f"sd = {fmt(result.moments.sd)}")

    return "\n".join(lines)
