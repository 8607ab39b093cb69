"""Polynomial and linear-system solvers.

Solvers return :class:`EquationResult` objects; a degenerate system is
reported as a failure result rather than raised, so the caller can show
the reason next to the inputs.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .config import DISCRIMINANT_TOLERANCE
from .formatting import format_plain
from .logging_config import get_logger
from .mathlib import round_half_up
from .types import EquationResult, ValidationError

logger = get_logger("solver")

NO_UNIQUE_SOLUTION = "No unique solution"
NO_SOLUTION = "No solution"
OUT_OF_RANGE = "Coefficients out of range"


def _complex_pair(real: float, imag: float) -> list[str]:
    """Format a conjugate pair as ``"a + bi"`` and ``"a - bi"``."""
    re_part = format_plain(round_half_up(real))
    im_part = format_plain(round_half_up(abs(imag)))
    return [f"{re_part} + {im_part}i", f"{re_part} - {im_part}i"]


def solve_quadratic(a: float, b: float, c: float) -> EquationResult:
    """Solve a*x**2 + b*x + c = 0.

    Args:
        a, b, c: Coefficients

    Returns:
        EquationResult of type "roots" with the discriminant, or a failure when
        both a and b are zero. Complex roots come back as strings.

    Example:
        >>> solve_quadratic(1, -3, 2).roots
        [2.0, 1.0]
    """
    if a == 0:
        if b == 0:
            logger.debug("Quadratic with a = b = 0 has no solution")
            return EquationResult.failure(NO_SOLUTION)
        return EquationResult(ok=True, result_type="roots", roots=[round_half_up(-c / b)])

    disc = b * b - 4 * a * c
    if disc > 0:
        root = math.sqrt(disc)
        roots = [round_half_up((-b + root) / (2 * a)), round_half_up((-b - root) / (2 * a))]
        return EquationResult(ok=True, result_type="roots", roots=roots, discriminant=disc)
    if disc == 0:
        return EquationResult(
            ok=True, result_type="roots", roots=[round_half_up(-b / (2 * a))], discriminant=disc
        )
    real = -b / (2 * a)
    imag = math.sqrt(-disc) / (2 * a)
    return EquationResult(
        ok=True,
        result_type="roots",
        roots=_complex_pair(real, imag),
        discriminant=disc,
        complex=True,
    )


def solve_cubic(a: float, b: float, c: float, d: float) -> EquationResult:
    """Solve a*x**3 + b*x**2 + c*x + d = 0.

    The cubic is reduced to t**3 + p*t + q = 0 with x = t - b/(3a). A positive
    discriminant gives one real root and a complex pair (Cardano), zero gives
    repeated real roots, and a negative one gives three real roots via the
    trigonometric method.
    """
    if a == 0:
        return solve_quadratic(b, c, d)

    # Normalise first so that powers of a tiny or huge a never appear
    b, c, d = b / a, c / a, d / a
    p = c - b * b / 3
    q = 2 * b * b * b / 27 - b * c / 3 + d
    q_term = q * q / 4
    p_term = p * p * p / 27
    disc = q_term + p_term
    offset = -b / 3
    if not (math.isfinite(disc) and math.isfinite(offset)):
        logger.debug("Cubic terms overflow after dividing by a = %r", a)
        return EquationResult.failure(OUT_OF_RANGE)
    # Cancellation leaves a residue proportional to the terms, not to 1
    if abs(disc) <= DISCRIMINANT_TOLERANCE * max(q_term, abs(p_term)):
        disc = 0.0

    if disc > 0:
        root = math.sqrt(disc)
        u = float(np.cbrt(-q / 2 + root))
        v = float(np.cbrt(-q / 2 - root))
        real_root = round_half_up(u + v + offset)
        real = -(u + v) / 2 + offset
        imag = math.sqrt(3) / 2 * (u - v)
        return EquationResult(
            ok=True,
            result_type="roots",
            roots=[real_root] + _complex_pair(real, imag),
            complex=True,
        )
    if disc == 0:
        u = float(np.cbrt(-q / 2))
        return EquationResult(
            ok=True,
            result_type="roots",
            roots=[round_half_up(2 * u + offset), round_half_up(-u + offset)],
        )

    r = math.sqrt(-p_term)
    # Clamp against rounding just outside acos's domain
    theta = math.acos(max(-1.0, min(1.0, -q / (2 * r))))
    m = 2 * float(np.cbrt(r))
    roots = [
        round_half_up(m * math.cos((theta + 2 * math.pi * k) / 3) + offset)
        for k in range(3)
    ]
    return EquationResult(ok=True, result_type="roots", roots=roots)


def solve_linear2(
    a1: float, b1: float, c1: float, a2: float, b2: float, c2: float
) -> EquationResult:
    """Solve a1*x + b1*y = c1, a2*x + b2*y = c2 by Cramer's rule.

    Example:
        >>> solve_linear2(1, 1, 3, 1, -1, 1)
        EquationResult(ok=True, result_type='point2', x=2.0, y=1.0)
    """
    det = a1 * b2 - a2 * b1
    if det == 0:
        logger.debug("Singular 2x2 system")
        return EquationResult.failure(NO_UNIQUE_SOLUTION)
    x = (c1 * b2 - c2 * b1) / det
    y = (a1 * c2 - a2 * c1) / det
    return EquationResult(
        ok=True, result_type="point2", x=round_half_up(x), y=round_half_up(y)
    )


def _det3(m: Sequence[Sequence[float]]) -> float:
    return (
        m[0][0] * (m[1][1] * m[2][2] - m[2][1] * m[1][2])
        - m[0][1] * (m[1][0] * m[2][2] - m[2][0] * m[1][2])
        + m[0][2] * (m[1][0] * m[2][1] - m[2][0] * m[1][1])
    )


def solve_linear3(matrix: Sequence[Sequence[float]]) -> EquationResult:
    """Solve a 3x3 linear system given as an augmented 3x4 matrix.

    Each row is ``[a, b, c, d]`` for ``a*x + b*y + c*z = d``.
    """
    if len(matrix) != 3 or any(len(row) != 4 for row in matrix):
        raise ValidationError(
            "Expected a 3x4 augmented matrix", code="INVALID_MATRIX"
        )
    coeffs = [list(row[:3]) for row in matrix]
    constants = [row[3] for row in matrix]

    det = _det3(coeffs)
    if det == 0:
        logger.debug("Singular 3x3 system")
        return EquationResult.failure(NO_UNIQUE_SOLUTION)

    solution = []
    for column in range(3):
        replaced = [
            [constants[i] if j == column else coeffs[i][j] for j in range(3)]
            for i in range(3)
        ]
        solution.append(round_half_up(_det3(replaced) / det))
    x, y, z = solution
    return EquationResult(ok=True, result_type="point3", x=x, y=y, z=z)
