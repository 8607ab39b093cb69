"""Centralized configuration for SafeCalc.

This module defines:
- Input validation limits (expression length, series length)
- Numeric method parameters (Simpson intervals, derivative step)
- Output formatting thresholds and precision
- Allowed constants and functions for the expression evaluator
- Regex patterns for lexing and base conversion

Configuration can be overridden via environment variables prefixed with
SAFECALC_.
"""

import math
import os
import re

import numpy as np

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("safecalc")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("SAFECALC_MAX_INPUT_LENGTH", "200"))  # characters
MAX_NESTING_DEPTH = int(
    os.getenv("SAFECALC_MAX_NESTING_DEPTH", "50")
)  # parenthesised groups and function calls
MAX_SERIES_TERMS = int(
    os.getenv("SAFECALC_MAX_SERIES_TERMS", "1000000")
)  # summation / product range length

# Combinatorics
FACTORIAL_LIMIT = int(
    os.getenv("SAFECALC_FACTORIAL_LIMIT", "170")
)  # largest n with finite n! in double precision

# Numeric calculus
SIMPSON_INTERVALS = int(os.getenv("SAFECALC_SIMPSON_INTERVALS", "1000"))
DERIVATIVE_STEP = float(os.getenv("SAFECALC_DERIVATIVE_STEP", "1e-8"))

# Cubic discriminant counts as zero when smaller than this fraction of its terms
DISCRIMINANT_TOLERANCE = float(
    os.getenv("SAFECALC_DISCRIMINANT_TOLERANCE", "1e-12")
)

# Output formatting
ROUND_DIGITS = int(os.getenv("SAFECALC_ROUND_DIGITS", "10"))
EXPONENT_DIGITS = int(os.getenv("SAFECALC_EXPONENT_DIGITS", "6"))
SMALL_THRESHOLD = float(os.getenv("SAFECALC_SMALL_THRESHOLD", "1e-10"))
LARGE_THRESHOLD = float(os.getenv("SAFECALC_LARGE_THRESHOLD", "1e10"))
DMS_SECONDS_DIGITS = int(os.getenv("SAFECALC_DMS_SECONDS_DIGITS", "3"))
ERROR_TEXT = os.getenv("SAFECALC_ERROR_TEXT", "Error")


def _ufunc(func):
    """Wrap a numpy ufunc so it takes and returns plain floats with IEEE semantics."""

    def call(value: float) -> float:
        with np.errstate(all="ignore"):
            return float(func(np.float64(value)))

    call.__name__ = getattr(func, "__name__", "ufunc")
    return call


def _round_half_up(value: float) -> float:
    # Matches the keypad's rounding: 2.5 -> 3, -2.5 -> -2
    with np.errstate(all="ignore"):
        return float(np.floor(np.float64(value) + 0.5))


ALLOWED_CONSTANTS = {
    "PI": math.pi,
    "E": math.e,
    "LN2": math.log(2),
    "LN10": math.log(10),
}

ALLOWED_FUNCTIONS = {
    "sin": _ufunc(np.sin),
    "cos": _ufunc(np.cos),
    "tan": _ufunc(np.tan),
    "asin": _ufunc(np.arcsin),
    "acos": _ufunc(np.arccos),
    "atan": _ufunc(np.arctan),
    "sinh": _ufunc(np.sinh),
    "cosh": _ufunc(np.cosh),
    "tanh": _ufunc(np.tanh),
    "asinh": _ufunc(np.arcsinh),
    "acosh": _ufunc(np.arccosh),
    "atanh": _ufunc(np.arctanh),
    "sqrt": _ufunc(np.sqrt),
    "cbrt": _ufunc(np.cbrt),
    "abs": _ufunc(np.abs),
    "floor": _ufunc(np.floor),
    "ceil": _ufunc(np.ceil),
    "round": _round_half_up,
    "log": _ufunc(np.log),
    "log10": _ufunc(np.log10),
    "log2": _ufunc(np.log2),
    "exp": _ufunc(np.exp),
    "sign": _ufunc(np.sign),
}

MATH_PREFIX = "Math."
VARIABLE_NAME = "x"

IDENTIFIER_RE = re.compile(r"[A-Za-z][A-Za-z0-9_.]*")
IDENTIFIER_CHAR_RE = re.compile(r"[A-Za-z0-9_]")
NUMBER_CHAR_RE = re.compile(r"[0-9.eE+\-]")

BASE_RADIX = {"DEC": 10, "HEX": 16, "OCT": 8, "BIN": 2}
BASE_DIGITS_RE = {
    "DEC": re.compile(r"^[+-]?[0-9]+$"),
    "HEX": re.compile(r"^[+-]?[0-9A-Fa-f]+$"),
    "OCT": re.compile(r"^[+-]?[0-7]+$"),
    "BIN": re.compile(r"^[+-]?[01]+$"),
}

# Keypad glyphs the display layer shows in place of ASCII operators
GLYPH_SUBSTITUTIONS = (("×", "*"), ("÷", "/"), ("^", "**"))
