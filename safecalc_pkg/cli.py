"""Command-line front end for SafeCalc.

The CLI is a caller of the core like any display layer: it substitutes
keypad glyphs for ASCII operators before handing expressions over.
"""

from __future__ import annotations

import argparse
import json
import sys

from .api import calculate, derivative, integrate_expr, product_series, sum_series
from .config import GLYPH_SUBSTITUTIONS, VERSION
from .logging_config import get_logger, setup_logging
from .operations import CalculatorContext
from .types import EvalResult

logger = get_logger("cli")


def substitute_glyphs(expression: str) -> str:
    """Replace display glyphs (×, ÷, ^) with the evaluator's ASCII operators."""
    for glyph, ascii_op in GLYPH_SUBSTITUTIONS:
        expression = expression.replace(glyph, ascii_op)
    return expression


def print_result(result: EvalResult, output_format: str = "human") -> None:
    if output_format == "json":
        print(json.dumps(result.to_dict()))
    elif result.ok:
        print(result.display)
    else:
        print(f"Error: {result.error}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safecalc", description="Safe arithmetic evaluator and numeric toolkit"
    )
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Expression to evaluate (a function of x with --integrate/--derive/--sum/--product)",
        dest="eval_expr",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--integrate", nargs=2, type=float, metavar=("A", "B"), help="Integrate over [A, B]"
    )
    mode.add_argument("--derive", type=float, metavar="X", help="Derivative at X")
    mode.add_argument(
        "--sum", nargs=2, type=float, metavar=("START", "END"), help="Sum over START..END"
    )
    mode.add_argument(
        "--product",
        nargs=2,
        type=float,
        metavar=("START", "END"),
        help="Product over START..END",
    )
    parser.add_argument(
        "--engineering", action="store_true", help="Show results in engineering notation"
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    return parser


def run_expression(args: argparse.Namespace) -> EvalResult:
    expression = substitute_glyphs(args.eval_expr)
    if args.integrate:
        return integrate_expr(expression, *args.integrate)
    if args.derive is not None:
        return derivative(expression, args.derive)
    if args.sum:
        return sum_series(expression, *args.sum)
    if args.product:
        return product_series(expression, *args.product)
    return calculate(expression, CalculatorContext(engineering=args.engineering))


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for SafeCalc CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0
    if not args.eval_expr:
        parser.print_usage(sys.stderr)
        print("Error: no expression given (use -e EXPR)", file=sys.stderr)
        return 1

    try:
        result = run_expression(args)
    except Exception as e:
        logger.error(f"Unexpected failure evaluating {args.eval_expr!r}: {e}", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logger.info("Evaluated %r -> %r", args.eval_expr, result)
    print_result(result, args.format)
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main_entry())
