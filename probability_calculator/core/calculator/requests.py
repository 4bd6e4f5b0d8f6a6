"""
Calculation requests.

A request names an operation and carries its numeric parameters:

    CalculationRequest("binomial exact", {"n": 10, "p": 0.5, "x": 5})
    CalculationRequest("t critical two-tail", {"alpha": 0.05, "df": 12})

The operation string is "<family> <query> [<tail>]". Family names are
hyphenated single tokens ("negative-binomial", "wilcoxon-signed",
"chi-square"); the optional tail selects one of several named answers and
may also be passed as the ``tail`` parameter.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from ..validation.parameters import ParameterError


class QueryKind(Enum):
    """
    Kinds of question a request can ask.

    Discrete families and tests: EXACT, LESS_EQUAL, GREATER_EQUAL, BETWEEN
    Continuous families: PDF, LESS_THAN, GREATER_THAN, BETWEEN, PERCENTILE
    Test statistics (z, t, chi-square, F): CRITICAL, P_VALUE
    """
    EXACT = "exact"
    LESS_EQUAL = "less-equal"
    GREATER_EQUAL = "greater-equal"
    BETWEEN = "between"
    PDF = "pdf"
    LESS_THAN = "less-than"
    GREATER_THAN = "greater-than"
    PERCENTILE = "percentile"
    CRITICAL = "critical"
    P_VALUE = "p-value"


_QUERY_ALIASES = {
    "cdf": QueryKind.LESS_THAN,
    "pmf": QueryKind.EXACT,
    "pvalue": QueryKind.P_VALUE,
}


def parse_query(token: str) -> QueryKind:
    """Query kind for an operation token (aliases accepted)."""
    token = token.strip().lower()
    if token in _QUERY_ALIASES:
        return _QUERY_ALIASES[token]
    try:
        return QueryKind(token)
    except ValueError:
        raise ParameterError("operation", f"Unknown calculation type: {token}") from None


@dataclass(frozen=True)
class CalculationRequest:
    """
    A named operation plus its parameters.

    Attributes:
        operation: "<family> <query> [<tail>]", case-insensitive
        parameters: Parameter values by name (numbers or numeric strings)
    """

    operation: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.operation, str) or not self.operation.strip():
            raise ParameterError("operation", "Please enter an operation")
        tokens = self.operation.lower().split()
        if len(tokens) < 2 or len(tokens) > 3:
            raise ParameterError(
                "operation",
                f"Operation must be '<family> <query> [<tail>]', got {self.operation!r}",
            )
        parse_query(tokens[1])
        object.__setattr__(self, "operation", " ".join(tokens))
        object.__setattr__(self, "parameters", dict(self.parameters or {}))

    @property
    def family(self) -> str:
        return self.operation.split()[0]

    @property
    def query(self) -> QueryKind:
        return parse_query(self.operation.split()[1])

    @property
    def tail(self) -> Optional[str]:
        """Tail named in the operation, else the ``tail`` parameter, else None."""
        tokens = self.operation.split()
        if len(tokens) == 3:
            return tokens[2]
        tail = self.parameters.get("tail")
        return str(tail).strip().lower() if tail else None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize request to dictionary."""
        return {
            "operation": self.operation,
            "parameters": dict(self.parameters),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CalculationRequest":
        """
        Create a request from ``{"operation": ..., "parameters": {...}}``.

        Args:
            data: Dictionary with request data

        Returns:
            CalculationRequest instance
        """
        if "operation" not in data:
            raise ParameterError("operation", "Please enter an operation")
        return cls(
            operation=data["operation"],
            parameters=dict(data.get("parameters") or {}),
        )
