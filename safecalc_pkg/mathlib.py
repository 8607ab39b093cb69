"""Scientific math library: combinatorics, number theory, conversions, bases, random.

Every function is pure. Outside its domain a function returns ``math.nan``
("undefined") or ``math.inf`` ("infinite") instead of raising, so the caller
can map both to its own error display.
"""

from __future__ import annotations

import math
import random
import sys
from typing import Optional

import numpy as np

from .config import (
    BASE_DIGITS_RE,
    BASE_RADIX,
    DMS_SECONDS_DIGITS,
    FACTORIAL_LIMIT,
    ROUND_DIGITS,
)
from .types import Dms, NonFiniteResult, PolarCoordinates, RectCoordinates, ValidationError

# Natural log of the largest finite float
_MAX_LOG = math.log(sys.float_info.max)


def ieee_pow(base: float, exponent: float) -> float:
    """Real power with IEEE-754 semantics.

    Negative bases with fractional exponents give NaN and overflow gives
    infinity, instead of Python's complex results and exceptions.
    """
    with np.errstate(all="ignore"):
        return float(np.power(np.float64(base), np.float64(exponent)))


def round_half_up(value: float, digits: int = ROUND_DIGITS) -> float:
    """Round to ``digits`` decimals, halves away from minus infinity."""
    scale = 10.0**digits
    scaled = value * scale
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / scale


def _is_integer(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value) and float(value).is_integer()


def _to_float(value: int) -> float:
    try:
        return float(value)
    except OverflowError:
        return math.inf


# Combinatorics


def factorial(n: float) -> float:
    """n! for integers 0..FACTORIAL_LIMIT; inf above, nan for negative or non-integer n."""
    if not _is_integer(n) or n < 0:
        return math.nan
    if n > FACTORIAL_LIMIT:
        return math.inf
    result = 1.0
    for i in range(2, int(n) + 1):
        result *= i
    return result


def npr(n: float, r: float) -> float:
    """Permutations of r items out of n.

    nPr >= (n - r + 1) ** r, so results past the float range are reported as
    inf before any big-integer product is formed.
    """
    if not (_is_integer(n) and _is_integer(r)) or r < 0 or r > n:
        return math.nan
    n, r = int(n), int(r)
    if r == n and n > FACTORIAL_LIMIT:
        return math.inf
    if r * math.log(n - r + 1) > _MAX_LOG:
        return math.inf
    return _to_float(math.perm(n, r))


def ncr(n: float, r: float) -> float:
    """Combinations of r items out of n.

    With k = min(r, n - r), nCr >= (n / k) ** k >= 2 ** k, which bounds k
    before the exact product is computed.
    """
    if not (_is_integer(n) and _is_integer(r)) or r < 0 or r > n:
        return math.nan
    n, r = int(n), int(r)
    k = min(r, n - r)
    if k > 0 and k * math.log(n / k) > _MAX_LOG:
        return math.inf
    return _to_float(math.comb(n, k))


# Number theory


def _rounded_magnitude(value: float) -> Optional[int]:
    if not math.isfinite(value):
        return None
    return abs(math.floor(value + 0.5))


def gcd(a: float, b: float) -> float:
    """Greatest common divisor of the rounded magnitudes of a and b."""
    a, b = _rounded_magnitude(a), _rounded_magnitude(b)
    if a is None or b is None:
        return math.nan
    while b:
        a, b = b, a % b
    return float(a)


def lcm(a: float, b: float) -> float:
    """Least common multiple of the rounded magnitudes; 0 when either is 0."""
    a, b = _rounded_magnitude(a), _rounded_magnitude(b)
    if a is None or b is None:
        return math.nan
    if a == 0 or b == 0:
        return 0.0
    return _to_float(a * b // math.gcd(a, b))


def mod(a: float, b: float) -> float:
    """True modulo: the result always has the sign of b."""
    if b == 0 or not (math.isfinite(a) and math.isfinite(b)):
        return math.nan
    return math.fmod(math.fmod(a, b) + b, b)


def nth_root(x: float, n: float) -> float:
    """Real n-th root keeping the sign of x; nan for n == 0 or an even root of a negative."""
    if n == 0:
        return math.nan
    if x < 0 and math.isfinite(n) and math.fmod(n, 2) == 0:
        return math.nan
    sign = -1.0 if x < 0 else 1.0
    return sign * ieee_pow(abs(x), 1.0 / n)


# Coordinates and angles


def to_polar(x: float, y: float, degrees: bool = False) -> PolarCoordinates:
    r = math.sqrt(x * x + y * y)
    theta = math.atan2(y, x)
    if degrees:
        theta = theta * (180 / math.pi)
    return PolarCoordinates(r=r, theta=theta)


def to_rect(r: float, theta: float, degrees: bool = False) -> RectCoordinates:
    if degrees:
        theta = theta * (math.pi / 180)
    return RectCoordinates(x=r * math.cos(theta), y=r * math.sin(theta))


def dec_to_dms(decimal: float) -> Dms:
    """Split decimal degrees into degrees, minutes and seconds (rounded to 3 places)."""
    negative = decimal < 0
    decimal = abs(decimal)
    degrees = math.floor(decimal)
    minutes_float = (decimal - degrees) * 60
    minutes = math.floor(minutes_float)
    seconds = (minutes_float - minutes) * 60
    return Dms(
        degrees=degrees,
        minutes=minutes,
        seconds=round_half_up(seconds, DMS_SECONDS_DIGITS),
        negative=negative,
    )


def dms_to_dec(degrees: float, minutes: float, seconds: float, negative: bool = False) -> float:
    """Combine degrees, minutes and seconds; the sign comes from ``degrees`` or ``negative``."""
    sign = -1.0 if degrees < 0 or negative else 1.0
    return sign * (abs(degrees) + minutes / 60 + seconds / 3600)


def format_dms(decimal: float) -> str:
    """Render decimal degrees as ``D°M'S"``, e.g. ``30°15'50.4"``."""
    from .formatting import format_plain

    dms = dec_to_dms(decimal)
    sign = "-" if dms.negative else ""
    return f"{sign}{dms.degrees}°{dms.minutes}'{format_plain(dms.seconds)}\""


# Base conversion


def _radix(base: str) -> int:
    try:
        return BASE_RADIX[base.upper()]
    except (KeyError, AttributeError):
        raise ValidationError(
            f"Unknown base: {base!r} (expected DEC, HEX, OCT or BIN)",
            code="INVALID_BASE",
        ) from None


def to_base(n: float, base: str) -> str:
    """Render the truncated magnitude of n in DEC, HEX, OCT or BIN (uppercase hex)."""
    radix = _radix(base)
    if not math.isfinite(n):
        raise NonFiniteResult(f"Cannot convert {n} to base {base}")
    value = math.floor(abs(n))
    return {10: "{:d}", 16: "{:X}", 8: "{:o}", 2: "{:b}"}[radix].format(value)


def from_base(text: str, base: str) -> float:
    """Parse digits written in DEC, HEX, OCT or BIN; nan when any digit is invalid."""
    radix = _radix(base)
    digits = text.strip()
    if not BASE_DIGITS_RE[base.upper()].match(digits):
        return math.nan
    return _to_float(int(digits, radix))


# Random numbers


def random_num(rng: Optional[random.Random] = None) -> float:
    """Uniform float in [0, 1)."""
    return (rng or random).random()


def random_int(a: float, b: float, rng: Optional[random.Random] = None) -> float:
    """Uniform integer in [ceil(a), floor(b)]; nan when that range is empty."""
    if not (math.isfinite(a) and math.isfinite(b)):
        return math.nan
    low, high = math.ceil(a), math.floor(b)
    if low > high:
        return math.nan
    return float((rng or random).randint(low, high))
