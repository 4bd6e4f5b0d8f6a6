"""probability_calculator.core.calculator.distributions

Family registry for the calculation façade.

Each family knows how to validate its parameters from a request, how to
build the distribution object, and which query value names it expects:

    family               parameters           query value(s)
    normal               mu, sigma            x | x1, x2 | p or percent
    exponential          lambda               x | x1, x2 | p or percent
    gamma                alpha, beta          x | x1, x2 | p or percent
    beta                 alpha, beta          x | x1, x2 | p or percent
    lognormal            mu, sigma            x | x1, x2 | p
    pareto               xm, alpha            x | x1, x2 | p
    weibull              lambda, k            x | x1, x2 | p
    binomial             n, p                 x | x1, x2
    poisson              lambda               x | x1, x2
    geometric            p                    x | x1, x2
    hypergeometric       N, M, n              x | x1, x2
    negative-binomial    r, p                 x | x1, x2
    wilcoxon-signed      n                    w
    mann-whitney         n1, n2               u
    wilcoxon-rank-sum    n1, n2               w
    runs                 n1, n2               r

Parameter problems raise ParameterError before any object is built; query
values outside the support (or an inverted "between" pair) raise
RangeError.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .requests import QueryKind
from ..models.base import ContinuousDistribution, DiscreteDistribution, Distribution
from ..models.continuous import (
    BetaDistribution,
    ExponentialDistribution,
    GammaDistribution,
    LognormalDistribution,
    NormalDistribution,
    ParetoDistribution,
    WeibullDistribution,
)
from ..models.discrete import (
    BinomialDistribution,
    GeometricDistribution,
    HypergeometricDistribution,
    NegativeBinomialDistribution,
    PoissonDistribution,
)
from ..models.nonparametric import MannWhitneyU, RunsTest, WilcoxonRankSum, WilcoxonSignedRank
from ..models.options import CalculatorOptions
from ..validation.parameters import (
    ParameterError,
    RangeError,
    require_int,
    require_number,
    require_ordered,
    require_positive,
    require_probability,
    require_statistic,
)

DISCRETE_QUERIES = (
    QueryKind.EXACT,
    QueryKind.LESS_EQUAL,
    QueryKind.GREATER_EQUAL,
    QueryKind.BETWEEN,
)
TEST_QUERIES = (QueryKind.EXACT, QueryKind.LESS_EQUAL, QueryKind.GREATER_EQUAL)
CONTINUOUS_QUERIES = (
    QueryKind.PDF,
    QueryKind.LESS_THAN,
    QueryKind.GREATER_THAN,
    QueryKind.BETWEEN,
    QueryKind.PERCENTILE,
)


@dataclass(frozen=True)
class Family:
    """
    Registry entry for one distribution or test.

    Attributes:
        key: Canonical family name used in operation strings
        build: Validates request parameters and constructs the distribution
        queries: Query kinds the family answers
        variable: Symbol of the random variable or statistic
        value_field: Parameter name of the single query value
        strict_between: "between" needs x1 < x2 (otherwise x1 <= x2)
        percent_input: Percentiles are requested as a percentage in (0, 100)
        domain: Checks a continuous query value against the support
    """

    key: str
    build: Callable[[Mapping[str, Any], CalculatorOptions], Distribution]
    queries: Tuple[QueryKind, ...]
    variable: str = "X"
    value_field: str = "x"
    strict_between: bool = False
    percent_input: bool = False
    domain: Optional[Callable[[Distribution, str, float], None]] = None

    @property
    def is_test(self) -> bool:
        return self.queries == TEST_QUERIES


def _rate(params: Mapping[str, Any]) -> Dict[str, Any]:
    """Accept ``lambda`` or ``lam`` for a rate/scale parameter."""
    if "lambda" in params and "lam" not in params:
        params = dict(params)
        params["lam"] = params["lambda"]
    return params


# ----------------------------
# Continuous support checks
# ----------------------------


def _non_negative(dist, field: str, x: float) -> None:
    if x < 0:
        raise RangeError(field, f"{field.upper()} must be non-negative")


def _unit_interval(dist, field: str, x: float) -> None:
    if x < 0 or x > 1:
        raise RangeError(field, f"{field.upper()} must be between 0 and 1 for Beta distribution")


def _positive(dist, field: str, x: float) -> None:
    if x <= 0:
        raise RangeError(field, f"{field.upper()} must be positive for log-normal distribution")


def _at_least_xm(dist, field: str, x: float) -> None:
    if x < dist.xm:
        raise RangeError(field, f"{field.upper()} must be greater than or equal to xm = {dist.xm:g}")


# ----------------------------
# Builders
# ----------------------------


def _normal(params, options):
    mu = require_number(params, "mu")
    sigma = require_positive(params, "sigma", "Standard deviation")
    return NormalDistribution(mu, sigma)


def _exponential(params, options):
    params = _rate(params)
    return ExponentialDistribution(require_positive(params, "lam", "Lambda (λ)"))


def _gamma(params, options):
    alpha = require_positive(params, "alpha", "Shape parameter α")
    beta = require_positive(params, "beta", "Scale parameter β")
    return GammaDistribution(alpha, beta)


def _beta(params, options):
    alpha = require_positive(params, "alpha", "Shape parameter α")
    beta = require_positive(params, "beta", "Shape parameter β")
    return BetaDistribution(alpha, beta)


def _lognormal(params, options):
    mu = require_number(params, "mu")
    sigma = require_positive(params, "sigma", "Standard deviation σ")
    return LognormalDistribution(mu, sigma)


def _pareto(params, options):
    xm = require_positive(params, "xm", "Scale parameter xm")
    alpha = require_positive(params, "alpha", "Shape parameter α")
    return ParetoDistribution(xm, alpha)


def _weibull(params, options):
    params = _rate(params)
    lam = require_positive(params, "lam", "Scale parameter λ")
    k = require_positive(params, "k", "Shape parameter k")
    return WeibullDistribution(lam, k)


def _binomial(params, options):
    n = require_int(params, "n", minimum=1, label="Number of trials (n)")
    p = require_probability(params, "p", label="Probability (p)")
    return BinomialDistribution(n, p)


def _poisson(params, options):
    params = _rate(params)
    return PoissonDistribution(require_positive(params, "lam", "Lambda (λ)"))


def _geometric(params, options):
    return GeometricDistribution(
        require_probability(params, "p", open_interval=True, label="Probability p")
    )


def _hypergeometric(params, options):
    N = require_int(params, "N", minimum=1, label="Population size N")
    M = require_int(params, "M", label="Number of success states M")
    if M < 0 or M > N:
        raise ParameterError("M", "Number of success states M must be between 0 and N")
    n = require_int(params, "n", label="Number of draws n")
    if n < 1 or n > N:
        raise ParameterError("n", "Number of draws n must be between 1 and N")
    return HypergeometricDistribution(N, M, n)


def _negative_binomial(params, options):
    r = require_int(params, "r", minimum=1, label="Number of successes r")
    p = require_probability(params, "p", open_interval=True, label="Probability p")
    return NegativeBinomialDistribution(r, p)


def _signed_rank(params, options):
    n = require_int(params, "n", minimum=1, label="Sample size n")
    if n > options.signed_rank_max_n:
        raise ParameterError(
            "n",
            f"Sample size n must be at most {options.signed_rank_max_n} for the exact "
            "signed-rank distribution",
        )
    return WilcoxonSignedRank(n)


def _two_sample_sizes(params, options) -> Tuple[int, int]:
    n1 = require_int(params, "n1", minimum=1, label="Sample size n1")
    n2 = require_int(params, "n2", minimum=1, label="Sample size n2")
    # the exact U table grows as (n1 * n2) ** 2 big-integer additions
    for name, value in (("n1", n1), ("n2", n2)):
        if value > options.mann_whitney_max_n:
            raise ParameterError(
                name,
                f"Sample size {name} must be at most {options.mann_whitney_max_n} for the "
                "exact Mann-Whitney distribution",
            )
    return n1, n2


def _mann_whitney(params, options):
    n1, n2 = _two_sample_sizes(params, options)
    return MannWhitneyU(n1, n2)


def _rank_sum(params, options):
    n1, n2 = _two_sample_sizes(params, options)
    return WilcoxonRankSum(n1, n2, exact_limit=options.rank_sum_exact_limit)



def _runs(params, options):
    n1 = require_int(params, "n1", minimum=0, label="n1")
    n2 = require_int(params, "n2", minimum=0, label="n2")
    return RunsTest(n1, n2)


FAMILIES: Dict[str, Family] = {
    f.key: f
    for f in (
        Family("normal", _normal, CONTINUOUS_QUERIES, strict_between=True, percent_input=True),
        Family("exponential", _exponential, CONTINUOUS_QUERIES, strict_between=True,
               percent_input=True, domain=_non_negative),
        Family("gamma", _gamma, CONTINUOUS_QUERIES, percent_input=True, domain=_non_negative),
        Family("beta", _beta, CONTINUOUS_QUERIES, percent_input=True, domain=_unit_interval),
        Family("lognormal", _lognormal, CONTINUOUS_QUERIES, domain=_positive),
        Family("pareto", _pareto, CONTINUOUS_QUERIES, domain=_at_least_xm),
        Family("weibull", _weibull, CONTINUOUS_QUERIES, domain=_non_negative),
        Family("binomial", _binomial, DISCRETE_QUERIES),
        Family("poisson", _poisson, DISCRETE_QUERIES),
        Family("geometric", _geometric, DISCRETE_QUERIES),
        Family("hypergeometric", _hypergeometric, DISCRETE_QUERIES),
        Family("negative-binomial", _negative_binomial, DISCRETE_QUERIES),
        Family("wilcoxon-signed", _signed_rank, TEST_QUERIES, variable="W", value_field="w"),
        Family("mann-whitney", _mann_whitney, TEST_QUERIES, variable="U", value_field="u"),
        Family("wilcoxon-rank-sum", _rank_sum, TEST_QUERIES, variable="W", value_field="w"),
        Family("runs", _runs, TEST_QUERIES, variable="R", value_field="r"),
    )
}

FAMILY_ALIASES = {
    "log-normal": "lognormal",
    "negbinom": "negative-binomial",
    "negative-binomial-distribution": "negative-binomial",
    "signed-rank": "wilcoxon-signed",
    "wilcoxon-signed-rank": "wilcoxon-signed",
    "mann-whitney-u": "mann-whitney",
    "rank-sum": "wilcoxon-rank-sum",
    "wilcoxon-rank": "wilcoxon-rank-sum",
    "runs-test": "runs",
}


def lookup_family(name: str) -> Optional[Family]:
    """Registry entry for a family name or alias, None when unknown."""
    key = FAMILY_ALIASES.get(name, name)
    return FAMILIES.get(key)


def build_distribution(
    family: Family, params: Mapping[str, Any], options: Optional[CalculatorOptions] = None
) -> Distribution:
    """Validate ``params`` and construct the family's distribution."""
    return family.build(params, options or CalculatorOptions.default())


# ----------------------------
# Queries
# ----------------------------


def _first_value_field(params: Mapping[str, Any], *names: str) -> str:
    for name in names:
        if name in params and params[name] not in (None, ""):
            return name
    return names[0]


def _discrete_value(family: Family, dist: DiscreteDistribution, params, field: str) -> int:
    label = family.variable if field in ("x", family.value_field) else field.upper()
    return require_statistic(params, field, dist.xmin, dist.xmax, label=label)


def _continuous_value(family: Family, dist: ContinuousDistribution, params, field: str) -> float:
    x = require_number(params, field, RangeError)
    if family.domain is not None:
        family.domain(dist, field, x)
    return x


def _percentile_probability(family: Family, params: Mapping[str, Any]) -> Tuple[str, float]:
    if "p" not in params and ("percent" in params or family.percent_input):
        percent = require_number(params, "percent")
        if percent <= 0 or percent >= 100:
            raise ParameterError("percent", "Percentile must be between 0 and 100 (exclusive)")
        return "percent", percent / 100.0
    p = require_number(params, "p")
    if p <= 0 or p >= 1:
        raise ParameterError("p", "Percentile p must be between 0 and 1 (exclusive)")
    return "p", p


def _discrete_query(family, dist, query, params) -> Tuple[float, Dict[str, float]]:
    if query is QueryKind.BETWEEN:
        if family.is_test:
            raise ParameterError("operation", f"{dist.name} does not support 'between'")
        x1_field = _first_value_field(params, "x1", "x")
        x1 = _discrete_value(family, dist, params, x1_field)
        x2 = _discrete_value(family, dist, params, "x2")
        require_ordered(x1, x2)
        return dist.probability_between(x1, x2), {"x1": x1, "x2": x2}

    field = family.value_field
    if not family.is_test:
        field = _first_value_field(params, "x", "x1")
    x = _discrete_value(family, dist, params, field)
    if query is QueryKind.EXACT:
        value = dist.pmf(x)
    elif query is QueryKind.LESS_EQUAL:
        value = dist.cdf(x)
    else:
        value = dist.survival(x)
    return value, {family.value_field: x}


def _continuous_query(family, dist, query, params) -> Tuple[float, Dict[str, float]]:
    if query is QueryKind.PERCENTILE:
        name, p = _percentile_probability(family, params)
        value = dist.percentile(p)
        arguments = {"p": p}
        if name == "percent":
            arguments["percent"] = p * 100.0
        return value, arguments

    if query is QueryKind.BETWEEN:
        x1 = _continuous_value(family, dist, params, _first_value_field(params, "x1", "x"))
        x2 = _continuous_value(family, dist, params, "x2")
        require_ordered(x1, x2, strict=family.strict_between)
        return dist.probability_between(x1, x2), {"x1": x1, "x2": x2}

    x = _continuous_value(family, dist, params, _first_value_field(params, "x", "x1"))
    if query is QueryKind.PDF:
        value = dist.pdf(x)
    elif query is QueryKind.LESS_THAN:
        value = dist.cdf(x)
    else:
        value = dist.survival(x)
    return value, {"x": x}


def answer_query(
    family: Family, dist: Distribution, query: QueryKind, params: Mapping[str, Any]
) -> Tuple[float, Dict[str, float]]:
    """Evaluate ``query`` on ``dist``; returns (value, arguments used)."""
    if query not in family.queries:
        raise ParameterError(
            "operation", f"{dist.name} does not support the '{query.value}' calculation"
        )
    if isinstance(dist, DiscreteDistribution):
        return _discrete_query(family, dist, query, params)
    return _continuous_query(family, dist, query, params)


def derived_values(dist: Distribution, arguments: Mapping[str, float]) -> Dict[str, Any]:
    """Extras reported alongside a test's probability."""
    extras: Dict[str, Any] = {}
    if isinstance(dist, MannWhitneyU) and "u" in arguments:
        extras["rank_sum"] = dist.u_to_rank_sum(arguments["u"])
    if isinstance(dist, WilcoxonRankSum):
        if "w" in arguments:
            extras["mann_whitney_u"] = dist.mann_whitney_u(arguments["w"])
        extras["normal_approximation"] = dist.uses_normal_approximation
    return extras


def support_of(dist: Distribution) -> Optional[Tuple[float, float]]:
    if isinstance(dist, DiscreteDistribution):
        return (dist.xmin, dist.xmax)
    return None

