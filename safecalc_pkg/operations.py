"""Single-operand keypad operations and the explicit calculator session context.

Unlike the expression evaluator, these operations check their domain and
raise, so that e.g. ``sqrt`` of a negative display value is reported as a
:class:`DomainError` rather than shown as NaN.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from .logging_config import get_logger
from .mathlib import factorial
from .types import DomainError, SingularityError, ValidationError

logger = get_logger("operations")


def _require(condition: bool, op: str, value: float) -> None:
    if not condition:
        logger.debug("Domain error: %s(%r)", op, value)
        raise DomainError(f"{op} is undefined for {value}")


def _forward_trig(func):
    def apply(value: float, radians: bool) -> float:
        return func(value if radians else math.radians(value))

    return apply


def _inverse_trig(func, bounded: bool):
    def apply(value: float, radians: bool) -> float:
        if bounded:
            _require(-1 <= value <= 1, func.__name__, value)
        result = func(value)
        return result if radians else math.degrees(result)

    return apply


def _sqrt(value: float, radians: bool) -> float:
    _require(value >= 0, "sqrt", value)
    return math.sqrt(value)


def _ln(value: float, radians: bool) -> float:
    _require(value > 0, "ln", value)
    return math.log(value)


def _log10(value: float, radians: bool) -> float:
    _require(value > 0, "log10", value)
    return math.log10(value)


def _reciprocal(value: float, radians: bool) -> float:
    if value == 0:
        raise SingularityError("Cannot divide by zero")
    return 1 / value


def _factorial(value: float, radians: bool) -> float:
    _require(value >= 0 and float(value).is_integer(), "factorial", value)
    return factorial(value)


UNARY_OPERATIONS = {
    "percent": lambda value, radians: value / 100,
    "sqrt": _sqrt,
    "square": lambda value, radians: value * value,
    "reciprocal": _reciprocal,
    "sin": _forward_trig(math.sin),
    "cos": _forward_trig(math.cos),
    "tan": _forward_trig(math.tan),
    "asin": _inverse_trig(math.asin, bounded=True),
    "acos": _inverse_trig(math.acos, bounded=True),
    "atan": _inverse_trig(math.atan, bounded=False),
    "ln": _ln,
    "log10": _log10,
    "factorial": _factorial,
    "pi": lambda value, radians: math.pi,
    "e": lambda value, radians: math.e,
}


def apply_unary(op: str, value: float, radians: bool = True) -> float:
    """Apply a keypad operation to the displayed value.

    Args:
        op: One of the keys in UNARY_OPERATIONS (e.g., "sqrt", "sin", "reciprocal")
        value: Operand
        radians: Angle mode; when False trig takes and inverse trig returns degrees

    Returns:
        The result as a float

    Raises:
        DomainError: Operand outside the operation's domain
        SingularityError: Reciprocal of zero
        ValidationError: Unknown operation
    """
    try:
        operation = UNARY_OPERATIONS[op]
    except KeyError:
        raise ValidationError(f"Unknown operation: {op}", code="UNKNOWN_OPERATION") from None
    if math.isnan(value):
        raise DomainError(f"{op} is undefined for NaN")
    if math.isinf(value) and op in ("sin", "cos", "tan"):
        raise DomainError(f"{op} is undefined for {value}")
    return operation(value, radians)


@dataclass(frozen=True)
class CalculatorContext:
    """Session state a caller threads through the core explicitly.

    Every method returns a new context; none mutates the receiver.
    """

    memory: float = 0.0
    radians: bool = True
    engineering: bool = False

    def memory_add(self, value: float) -> "CalculatorContext":
        return replace(self, memory=self.memory + value)

    def memory_subtract(self, value: float) -> "CalculatorContext":
        return replace(self, memory=self.memory - value)

    def memory_recall(self) -> float:
        return self.memory

    def memory_clear(self) -> "CalculatorContext":
        return replace(self, memory=0.0)

    def toggle_angle_mode(self) -> "CalculatorContext":
        return replace(self, radians=not self.radians)

    def toggle_engineering(self) -> "CalculatorContext":
        return replace(self, engineering=not self.engineering)
