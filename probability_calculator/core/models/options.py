"""
Calculator options.

This module defines the per-request configuration for the calculation
façade: sample-size bounds for the exact rank tests and the number of
digits used when rendering results.
"""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass
class CalculatorOptions:
    """
    Configuration options for a calculation.

    Attributes:
        signed_rank_max_n: Largest n accepted for the exact signed-rank test (default: 25)
        mann_whitney_max_n: Largest sample size accepted by the exact Mann-Whitney
            and rank-sum distributions (default: 50)
        rank_sum_exact_limit: Largest sample size for which the rank-sum cdf
            is summed exactly; larger samples use the normal approximation (default: 8)
        latex_digits: Decimal places in LaTeX output (default: 4)
        plain_digits: Decimal places in plain-text output (default: 6)
    """

    signed_rank_max_n: int = 25
    mann_whitney_max_n: int = 50
    rank_sum_exact_limit: int = 8
    latex_digits: int = 4
    plain_digits: int = 6

    def __post_init__(self):
        """Validate options after initialization."""
        if self.signed_rank_max_n < 1:
            raise ValueError("signed_rank_max_n must be at least 1")

        if self.mann_whitney_max_n < 1:
            raise ValueError("mann_whitney_max_n must be at least 1")

        if self.rank_sum_exact_limit < 1:
            raise ValueError("rank_sum_exact_limit must be at least 1")

        if not 0 <= self.latex_digits <= 15:
            raise ValueError("latex_digits must be between 0 and 15")

        if not 0 <= self.plain_digits <= 15:
            raise ValueError("plain_digits must be between 0 and 15")

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize options to dictionary.

        Returns:
            Dictionary representation suitable for JSON serialization
        """
        return {
            "signed_rank_max_n": self.signed_rank_max_n,
            "mann_whitney_max_n": self.mann_whitney_max_n,
            "rank_sum_exact_limit": self.rank_sum_exact_limit,
            "latex_digits": self.latex_digits,
            "plain_digits": self.plain_digits,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CalculatorOptions":
        """
        Create options from dictionary.

        Unknown keys are ignored; missing keys take their defaults.

        Args:
            data: Dictionary with option values

        Returns:
            CalculatorOptions instance
        """
        defaults = cls()
        return cls(
            signed_rank_max_n=int(data.get("signed_rank_max_n", defaults.signed_rank_max_n)),
            mann_whitney_max_n=int(data.get("mann_whitney_max_n", defaults.mann_whitney_max_n)),
            rank_sum_exact_limit=int(data.get("rank_sum_exact_limit", defaults.rank_sum_exact_limit)),
            latex_digits=int(data.get("latex_digits", defaults.latex_digits)),
            plain_digits=int(data.get("plain_digits", defaults.plain_digits)),
        )

    @classmethod
    def default(cls) -> "CalculatorOptions":
        """Create options with default values."""
        return cls()
