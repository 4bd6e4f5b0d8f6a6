"""
Result records for the probability calculator.
"""

from .calculation_result import CalculationResult

__all__ = ["CalculationResult"]
