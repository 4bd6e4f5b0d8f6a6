"""LaTeX fragment rendering of calculation results.

Produces ``$$...$$`` display-math lines for a
:class:`~probability_calculator.core.results.calculation_result.CalculationResult`.
The output is plain text; embedding it in a page is up to the caller.

Number formatting:
- infinities render as ``\\infty`` / ``-\\infty``, NaN as ``\\text{NaN}``
- |x| < 0.001 or |x| >= 1000 renders as ``m \\times 10^{e}``
- anything else is fixed point with ``digits`` decimals
"""

from __future__ import annotations

import math
from typing import Optional

from ..models.base import Moments
from ..models.options import CalculatorOptions
from ..results.calculation_result import CalculationResult


def format_number_for_latex(value: float, digits: int = 4) -> str:
    """Format a number for display math."""
    if value is None:
        return "\\text{undefined}"
    value = float(value)
    if math.isnan(value):
        return "\\text{NaN}"
    if math.isinf(value):
        return "\\infty" if value > 0 else "-\\infty"
    if value != 0 and (abs(value) < 0.001 or abs(value) >= 1000):
        mantissa, exponent = f"{value:.{digits}e}".split("e")
        return f"{mantissa} \\times 10^{{{int(exponent)}}}"
    return f"{value:.{digits}f}"


def format_moments_latex(moments: Moments, name: str, digits: int = 4) -> str:
    """Mean, variance and standard deviation as three display-math lines."""
    fmt = lambda v: format_number_for_latex(v, digits)  # noqa: E731
    lines = [
        f"{name} Distribution Properties:",
        f"$$\\mu = E(X) = {fmt(moments.mean)}$$",
        f"$$\\sigma^2 = Var(X) = {fmt(moments.variance)}$$",
        f"$$\\sigma = SD(X) = {fmt(moments.sd)}$$",
    ]
    return "\n".join(lines)


def _arg(value: float, digits: int) -> str:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return format_number_for_latex(value, digits)


def _probability_expression(result: CalculationResult, digits: int) -> str:
    v = result.variable
    args = result.arguments
    discrete = result.support is not None
    query = result.query

    if query == "between":
        x1, x2 = _arg(args["x1"], digits), _arg(args["x2"], digits)
        if discrete:
            return f"P({x1} \\leq {v} \\leq {x2})"
        return f"P({x1} < {v} \\leq {x2})"

    x = _arg(next(iter(args.values())), digits)
    if query == "exact":
        return f"P({v} = {x})"
    if query in ("less-equal", "less-than"):
        return f"P({v} \\leq {x})"
    if query == "greater-equal":
        return f"P({v} \\geq {x})"
    if query == "greater-than":
        return f"P({v} > {x})"
    return f"f({x})"


def _statistic_lines(result: CalculationResult, digits: int) -> list[str]:
    parts: list[str] = []
    symbol = result.variable
    for name, value in result.values.items():
        parts.append(f"$${symbol}_{{\\text{{{name}}}}} = {format_number_for_latex(value, digits)}$$")
    if result.parameters:
        dof = ", \\quad ".join(f"\\text{{{k}}} = {v}" for k, v in result.parameters.items())
        parts.append(f"$${dof}$$")
    return parts


def render_latex_report(
    result: CalculationResult,
    options: Optional[CalculatorOptions] = None,
) -> str:
    """Render a :class:`CalculationResult` as LaTeX display-math lines."""
    digits = (options or CalculatorOptions.default()).latex_digits
    fmt = lambda v: format_number_for_latex(v, digits)  # noqa: E731

    parts: list[str] = [f"{result.family}: {result.operation}"]

    if result.query in ("critical", "p-value"):
        parts.extend(_statistic_lines(result, digits))
        return "\n".join(parts)

    if result.query == "percentile":
        p = result.arguments["p"]
        parts.append(f"$$x_{{{fmt(p)}}} = {fmt(result.value)}$$")
        parts.append(f"$$P(X \\leq {fmt(result.value)}) = {fmt(p)}$$")
    else:
        parts.append(f"$${_probability_expression(result, digits)} = {fmt(result.value)}$$")

    if "rank_sum" in result.extras:
        parts.append(
            f"$$W = U + \\frac{{n_1(n_1+1)}}{{2}} = {_arg(result.extras['rank_sum'], digits)}$$"
        )
    if "mann_whitney_u" in result.extras:
        parts.append(
            f"$$U = W - \\frac{{n_1(n_1+1)}}{{2}} = {_arg(result.extras['mann_whitney_u'], digits)}$$"
        )

    if result.support is not None:
        low, high = result.support
        parts.append(f"$${result.variable} \\in [{_arg(low, digits)}, {_arg(high, digits)}]$$")

    if result.moments is not None:
        parts.append(format_moments_latex(result.moments, result.family, digits))

    return "\n".join(parts)
