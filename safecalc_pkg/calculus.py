"""Numeric calculus operations on functions of one variable."""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

from .config import DERIVATIVE_STEP, MAX_SERIES_TERMS, SIMPSON_INTERVALS
from .types import ValidationError

NumericFunction = Callable[[float], float]


def num_integrate(
    fn: NumericFunction, a: float, b: float, n: int = SIMPSON_INTERVALS
) -> float:
    """Definite integral of fn over [a, b] by composite Simpson's rule.

    Args:
        fn: Function to integrate
        a: Lower bound
        b: Upper bound (may be below ``a``; the sign follows)
        n: Number of subintervals, bumped to the next even number

    Returns:
        Approximate integral; 0.0 when a == b
    """
    if a == b:
        return 0.0
    n = max(int(n), 2)
    if n % 2:
        n += 1
    h = (b - a) / n
    samples = np.fromiter(
        (fn(a + i * h) for i in range(n + 1)), dtype=np.float64, count=n + 1
    )
    weights = np.full(n + 1, 2.0)
    weights[1::2] = 4.0
    weights[0] = weights[-1] = 1.0
    with np.errstate(all="ignore"):
        return float(h / 3 * np.dot(weights, samples))


def num_derivative(fn: NumericFunction, x: float, h: float = DERIVATIVE_STEP) -> float:
    """First derivative of fn at x by central difference."""
    return (fn(x + h) - fn(x - h)) / (2 * h)


def _series_range(start: float, end: float) -> range | None:
    if not all(math.isfinite(v) and float(v).is_integer() for v in (start, end)):
        return None
    terms = range(int(start), int(end) + 1)
    if len(terms) > MAX_SERIES_TERMS:
        raise ValidationError(
            f"Range has {len(terms)} terms (max {MAX_SERIES_TERMS})",
            code="RANGE_TOO_LARGE",
        )
    return terms


def summation(fn: NumericFunction, start: float, end: float) -> float:
    """Sum of fn(i) for integers i from start to end inclusive; 0 for an empty range."""
    terms = _series_range(start, end)
    if terms is None:
        return math.nan
    total = 0.0
    for i in terms:
        total += fn(float(i))
    return total


def product(fn: NumericFunction, start: float, end: float) -> float:
    """Product of fn(i) for integers i from start to end inclusive; 1 for an empty range."""
    terms = _series_range(start, end)
    if terms is None:
        return math.nan
    result = 1.0
    for i in terms:
        result *= fn(float(i))
    return result
