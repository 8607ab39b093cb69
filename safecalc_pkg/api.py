"""Public API for SafeCalc - returns structured objects without side effects."""

from __future__ import annotations

import math
from typing import Callable

from .calculus import num_derivative, num_integrate, product, summation
from .formatting import format_result
from .logging_config import get_logger
from .mathlib import round_half_up
from .operations import CalculatorContext
from .parser import make_function, parse_expression
from .types import CalculatorError, EvalResult, NonFiniteResult, SingularityError

logger = get_logger("api")


def checked_evaluate(expression: str) -> float:
    """Evaluate an expression and insist on a finite result.

    Raises:
        SingularityError: The expression divides by zero
        NonFiniteResult: The value is NaN or infinite
        LexError, ParseError, ValidationError: As raised by the evaluator
    """
    parser = parse_expression(expression)
    if parser.division_by_zero:
        raise SingularityError("Division by zero")
    if not math.isfinite(parser.result):
        raise NonFiniteResult(f"Result is {parser.result}")
    return parser.result


def _error_result(exc: CalculatorError) -> EvalResult:
    logger.debug("%s [%s]: %s", type(exc).__name__, exc.code, exc.message)
    return EvalResult(ok=False, error=exc.message, error_code=exc.code)


def calculate(expression: str, context: CalculatorContext | None = None) -> EvalResult:
    """Evaluate an expression and format it for display.

    Args:
        expression: Expression string with ASCII operators (e.g., "2 ** 10 / 4")
        context: Session context; only ``engineering`` affects the output

    Returns:
        EvalResult with value and display string, or the error message and
        its code (LexError, ParseError, SINGULARITY or NON_FINITE codes)

    Example:
        >>> calculate("2 ** 3 ** 2").display
        '512'
    """
    context = context or CalculatorContext()
    try:
        value = checked_evaluate(expression)
    except CalculatorError as exc:
        return _error_result(exc)
    return EvalResult(
        ok=True, value=value, display=format_result(value, context.engineering)
    )


def _run_numeric(
    expression: str, routine: Callable[[Callable[[float], float]], float]
) -> EvalResult:
    try:
        fn = make_function(expression)
        value = routine(fn)
        if not math.isfinite(value):
            raise NonFiniteResult(f"Result is {value}")
    except CalculatorError as exc:
        return _error_result(exc)
    value = round_half_up(value)
    return EvalResult(ok=True, value=value, display=format_result(value))


def integrate_expr(expression: str, a: float, b: float) -> EvalResult:
    """Definite integral of an expression in x over [a, b].

    Example:
        >>> integrate_expr("x ** 2", 0, 3).value
        9.0
    """
    return _run_numeric(expression, lambda fn: num_integrate(fn, a, b))


def derivative(expression: str, x: float) -> EvalResult:
    """Derivative of an expression in x at the given point."""
    return _run_numeric(expression, lambda fn: num_derivative(fn, x))


def sum_series(expression: str, start: float, end: float) -> EvalResult:
    """Sum of an expression in x for integer x from start to end."""
    return _run_numeric(expression, lambda fn: summation(fn, start, end))


def product_series(expression: str, start: float, end: float) -> EvalResult:
    """Product of an expression in x for integer x from start to end."""
    return _run_numeric(expression, lambda fn: product(fn, start, end))


def validate_expression(expression: str, variable: bool = False) -> tuple[bool, str | None]:
    """Validate an expression without keeping its value.

    Args:
        expression: Expression string to validate
        variable: Validate as a function of x (allows x and function names)

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> validate_expression("2 + 2")
        (True, None)
        >>> validate_expression("__import__('os')")
        (False, 'Unexpected character: _')
    """
    try:
        if variable:
            make_function(expression)
        else:
            parse_expression(expression)
        return True, None
    except CalculatorError as e:
        return False, str(e)
