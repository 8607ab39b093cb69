"""Result formatting: turn a float into the string the display shows."""

from __future__ import annotations

import math

import numpy as np

from .config import (
    ERROR_TEXT,
    EXPONENT_DIGITS,
    LARGE_THRESHOLD,
    ROUND_DIGITS,
    SMALL_THRESHOLD,
)
from .mathlib import round_half_up


def format_plain(value: float) -> str:
    """Shortest round-trip positional decimal, e.g. ``5``, ``0.1``, ``-2.25``.

    Negative zero prints as ``0``.
    """
    if value == 0:
        return "0"
    return np.format_float_positional(value, unique=True, trim="-")


def to_eng_notation(value: float) -> str:
    """Engineering notation: the exponent is a multiple of 3.

    Examples:
        >>> to_eng_notation(12345)
        '12.345×10^3'
        >>> to_eng_notation(0.00042)
        '420×10^-6'
        >>> to_eng_notation(42)
        '42'
    """
    if value == 0:
        return "0"
    exponent = math.floor(math.log10(abs(value)))
    eng_exponent = (exponent // 3) * 3
    # Two steps: 10.0 ** eng_exponent alone underflows to 0 for subnormals
    half = eng_exponent // 2
    mantissa = round_half_up(value / 10.0**half / 10.0 ** (eng_exponent - half))
    if eng_exponent == 0:
        return format_plain(mantissa)
    return f"{format_plain(mantissa)}×10^{eng_exponent}"


def format_result(value: float, engineering: bool = False) -> str:
    """Format a computed value for display.

    Args:
        value: The value to show
        engineering: Use engineering notation

    Returns:
        ERROR_TEXT for NaN or infinity; exponential notation for magnitudes
        below 1e-10 or above 1e10; otherwise the value rounded to 10 decimals
    """
    if not math.isfinite(value):
        return ERROR_TEXT
    if engineering:
        return to_eng_notation(value)
    magnitude = abs(value)
    if (magnitude < SMALL_THRESHOLD and value != 0) or magnitude > LARGE_THRESHOLD:
        return f"{value:.{EXPONENT_DIGITS}e}"
    return format_plain(round_half_up(value, ROUND_DIGITS))
