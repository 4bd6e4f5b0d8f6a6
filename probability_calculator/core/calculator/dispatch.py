"""probability_calculator.core.calculator.dispatch

Single entry point of the calculation façade:

    result = calculate(CalculationRequest("poisson less-equal", {"lambda": 3, "x": 2}))
    result.value          # 0.42319008...

Requests are routed either to a distribution family (probability,
density and percentile queries) or to a test statistic (critical values and
p-values). Validation failures propagate as ParameterError / RangeError;
they are logged at INFO and never swallowed.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from . import critical_values as stats
from .distributions import answer_query, build_distribution, derived_values, lookup_family, support_of
from .requests import CalculationRequest, QueryKind
from ..models.options import CalculatorOptions
from ..results.calculation_result import CalculationResult
from ..validation.parameters import CalculationError, ParameterError

logger = logging.getLogger(__name__)

_TAIL_ALIASES = {
    "right": "right-tail",
    "right-tail": "right",
    "left-tail": "left",
    "two-tailed": "two-tail",
    "two-tail": "double-tail",
    "one-tail": "single-tail",
    "single": "single-tail",
    "double": "double-tail",
}


def _select_tail(tail: Optional[str], values: Dict[str, float]) -> Optional[float]:
    """The value for ``tail``; None when no tail was requested."""
    if tail is None:
        return None
    for key in (tail, _TAIL_ALIASES.get(tail)):
        if key in values:
            return values[key]
    raise ParameterError("tail", f"Tail must be one of: {', '.join(values)}")


def _statistic_result(request: CalculationRequest, statistic: str) -> CalculationResult:
    if request.query is QueryKind.CRITICAL:
        answer = stats.critical_values(statistic, request.parameters)
    elif request.query is QueryKind.P_VALUE:
        answer = stats.p_values(statistic, request.parameters)
    else:
        raise ParameterError(
            "operation",
            f"{stats.display_name(statistic)} supports 'critical' and 'p-value' calculations",
        )
    return CalculationResult(
        operation=request.operation,
        family=stats.display_name(statistic),
        query=request.query.value,
        variable=stats.symbol(statistic),
        arguments=answer["arguments"],
        value=_select_tail(request.tail, answer["values"]),
        values=answer["values"],
        parameters=answer["parameters"],
    )


def _distribution_result(request: CalculationRequest, options: CalculatorOptions) -> CalculationResult:
    family = lookup_family(request.family)
    if family is None:
        raise ParameterError("operation", f"Unknown distribution: {request.family}")
    if request.query not in family.queries:
        raise ParameterError(
            "operation", f"'{request.query.value}' is not available for {family.key}"
        )

    dist = build_distribution(family, request.parameters, options)
    value, arguments = answer_query(family, dist, request.query, request.parameters)
    return CalculationResult(
        operation=request.operation,
        family=dist.name,
        query=request.query.value,
        variable=family.variable,
        arguments=arguments,
        value=value,
        parameters=dist.parameters(),
        moments=dist.moments(),
        support=support_of(dist),
        extras=derived_values(dist, arguments),
    )


def calculate(
    request: Union[CalculationRequest, Mapping[str, Any]],
    options: Optional[CalculatorOptions] = None,
) -> CalculationResult:
    """
    Answer one calculation request.

    Args:
        request: CalculationRequest, or a dict accepted by CalculationRequest.from_dict
        options: Calculator options (defaults when None)

    Returns:
        CalculationResult

    Raises:
        ParameterError: invalid parameter, unknown operation or unsupported query
        RangeError: query value outside the support, or inverted interval
        ProviderUnavailableError: the special-function library could not be loaded
    """
    if not isinstance(request, CalculationRequest):
        request = CalculationRequest.from_dict(request)
    if options is None:
        options = CalculatorOptions.default()

    logger.debug("Calculating %r with parameters %s", request.operation, request.parameters)
    try:
        statistic = stats.STATISTICS.get(request.family)
        if statistic is not None:
            result = _statistic_result(request, statistic)
        else:
            result = _distribution_result(request, options)
    except CalculationError as exc:
        logger.info("Rejected %r: %s", request.operation, exc)
        raise

    logger.debug("Result for %r: %r", request.operation, result)
    return result
