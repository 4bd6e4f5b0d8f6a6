"""Command line interface: one calculation request per invocation.

Examples:
    probcalc "binomial exact" n=10 p=0.5 x=5
    probcalc "t critical two-tail" alpha=0.05 df=12
    probcalc --latex "mann-whitney less-equal" n1=3 n2=3 u=2
    probcalc --text "poisson less-equal" lambda=3 x=2

Results are printed as JSON, as LaTeX with ``--latex`` or as plain text with
``--text``. Invalid input prints the error message to stderr and exits with
status 2.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional

from .core.calculator import CalculationRequest, calculate
from .core.reports import render_latex_report, render_text_report
from .core.validation import CalculationError
from .settings import CalculatorSettings

logger = logging.getLogger(__name__)


def parse_assignments(items: List[str]) -> Dict[str, str]:
    """Turn ``["n=10", "p=0.5"]`` into ``{"n": "10", "p": "0.5"}``."""
    params: Dict[str, str] = {}
    for item in items:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"expected key=value, got {item!r}")
        params[key.strip()] = value.strip()
    return params


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="probcalc",
        description="Probability distribution and nonparametric test calculator",
    )
    parser.add_argument(
        "operation",
        help='Operation "<family> <query> [<tail>]", e.g. "poisson less-equal"',
    )
    parser.add_argument(
        "parameters",
        nargs="*",
        metavar="key=value",
        help="Distribution parameters and query values",
    )
    fmt = parser.add_mutually_exclusive_group()
    fmt.add_argument("--latex", action="store_true", help="Print a LaTeX fragment")
    fmt.add_argument("--text", action="store_true", help="Print plain text")
    fmt.add_argument("--json", action="store_true", help="Print JSON (default)")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Logging level (default: PROBCALC_LOG_LEVEL or warning)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = args.log_level or CalculatorSettings.get("log_level")
    logging.basicConfig(level=getattr(logging, level.upper()), format="%(levelname)s %(name)s: %(message)s")

    try:
        params = parse_assignments(args.parameters)
    except argparse.ArgumentTypeError as exc:
        parser.error(str(exc))

    options = CalculatorSettings.to_options()
    logger.debug("Calculator options: %s", options.to_dict())
    if args.latex:
        output_format = "latex"
    elif args.text:
        output_format = "text"
    elif args.json:
        output_format = "json"
    else:
        output_format = CalculatorSettings.get("output_format")

    try:
        result = calculate(CalculationRequest(args.operation, params), options)
    except CalculationError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if output_format == "latex":
        print(render_latex_report(result, options))
    elif output_format == "text":
        print(render_text_report(result, options))
    else:
        print(result.to_json(indent=CalculatorSettings.get("json_indent")))
    return 0


if __name__ == "__main__":
    sys.exit(main())
