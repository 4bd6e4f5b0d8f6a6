"""
Report rendering for calculation results.
"""

from .latex_report import (
    format_number_for_latex,
    format_moments_latex,
    render_latex_report,
)
from .text_report import format_number, render_text_report

__all__ = [
    "format_number_for_latex",
    "format_number",
    "format_moments_latex",
    "render_latex_report",
    "render_text_report",
]
