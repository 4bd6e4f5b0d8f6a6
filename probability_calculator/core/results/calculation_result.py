"""
Calculation result records.

A CalculationResult carries everything a caller or a renderer needs about
one answered request: the probability or quantile, the named values of a
critical-value or p-value query, the distribution's moments and support,
and any derived quantities (such as the rank-sum equivalent of U).
"""

import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from ..models.base import Moments


def _iso_utc_now() -> str:
    """Return an ISO-8601 UTC timestamp ending with 'Z'."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _json_safe_value(value: Any) -> Any:
    """Convert non-JSON-safe floats (nan/inf) to None."""
    if value is None:
        return None
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
    return value


def _json_safe_dict(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: _json_safe_value(value) for key, value in values.items()}


@dataclass
class CalculationResult:
    """
    Answer to a single calculation request.

    Attributes:
        operation: Normalized operation string, e.g. "binomial exact"
        family: Display name of the distribution, test or statistic
        query: Query kind ("exact", "less-than", "critical", ...)
        variable: Symbol of the random variable or statistic ("X", "W", "U", "R", "z", ...)
        arguments: Query arguments by name (x, x1/x2, p, alpha, ...)
        value: Single numeric answer (probability, density or quantile)
        values: Named answers for multi-valued queries (critical values, p-values)
        parameters: Validated distribution parameters
        moments: Mean, variance and standard deviation, when defined
        support: Inclusive (xmin, xmax) support of a discrete distribution or test
        extras: Derived quantities (rank-sum equivalent, approximation mode, ...)
        timestamp: ISO-8601 UTC creation time
    """

    operation: str
    family: str
    query: str
    variable: str = "X"
    arguments: Dict[str, float] = field(default_factory=dict)

    value: Optional[float] = None
    values: Dict[str, float] = field(default_factory=dict)

    parameters: Dict[str, Any] = field(default_factory=dict)
    moments: Optional[Moments] = None
    support: Optional[Tuple[float, float]] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    timestamp: Optional[str] = None

    def __post_init__(self):
        """Set timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = _iso_utc_now()

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize calculation result to dictionary.

        Infinite and NaN floats become None so the output is valid JSON.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "operation": self.operation,
            "family": self.family,
            "query": self.query,
            "variable": self.variable,
            "arguments": _json_safe_dict(self.arguments),
            "value": _json_safe_value(self.value),
            "values": _json_safe_dict(self.values),
            "parameters": _json_safe_dict(self.parameters),
            "moments": _json_safe_dict(self.moments.to_dict()) if self.moments else None,
            "support": [_json_safe_value(b) for b in self.support] if self.support else None,
            "extras": _json_safe_dict(self.extras),
            "timestamp": self.timestamp,
        }

    def to_json(self, indent: int = 2) -> str:
        """
        Serialize calculation result to JSON string.

        Args:
            indent: Number of spaces for indentation

        Returns:
            JSON string representation
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalculationResult":
        """
        Create CalculationResult from dictionary.

        A support bound serialized as None (unbounded) is restored as infinity.

        Args:
            data: Dictionary with result data

        Returns:
            New CalculationResult instance
        """
        moments = None
        if data.get("moments"):
            m = data["moments"]
            moments = Moments(
                mean=math.inf if m.get("mean") is None else m["mean"],
                variance=math.inf if m.get("variance") is None else m["variance"],
                sd=math.inf if m.get("sd") is None else m["sd"],
            )

        support = None
        if data.get("support"):
            low, high = data["support"]
            support = (low, math.inf if high is None else high)

        return cls(
            operation=data["operation"],
            family=data.get("family", ""),
            query=data.get("query", ""),
            variable=data.get("variable", "X"),
            arguments=dict(data.get("arguments", {})),
            value=data.get("value"),
            values=dict(data.get("values", {})),
            parameters=dict(data.get("parameters", {})),
            moments=moments,
            support=support,
            extras=dict(data.get("extras", {})),
            timestamp=data.get("timestamp"),
        )

    def __repr__(self) -> str:
        if self.value is not None:
            answer = f"value={self.value:.6g}"
        else:
            answer = ", ".join(f"{k}={v:.6g}" for k, v in self.values.items())
        return f"CalculationResult({self.operation!r}, {answer})"
