"""Type definitions, result dataclasses and exceptions for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class TokenType(Enum):
    """Kinds of token produced by the tokenizer."""

    NUMBER = "NUMBER"
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "**"
    LPAREN = "("
    RPAREN = ")"
    VARIABLE = "VAR"
    FUNCTION = "FUNC"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A lexed token. NUMBER carries a float, FUNCTION carries the function name."""

    type: TokenType
    value: Union[float, str, None] = None


@dataclass
class EvalResult:
    """Result of evaluating an expression or running a numeric routine."""

    ok: bool
    value: float | None = None
    display: str | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.value is not None:
            result_dict["value"] = self.value
        if self.display is not None:
            result_dict["display"] = self.display
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        parts = [f"ok={self.ok}"]
        if self.value is not None:
            parts.append(f"value={self.value!r}")
        if self.display is not None:
            parts.append(f"display={self.display!r}")
        return f"EvalResult({', '.join(parts)})"


@dataclass
class EquationResult:
    """Result of solving a polynomial equation or linear system."""

    ok: bool
    result_type: str  # "roots", "point2", "point3", "failure"
    error: str | None = None
    # For roots type
    roots: list[float | str] | None = None
    discriminant: float | None = None
    complex: bool = False
    # For point types
    x: float | None = None
    y: float | None = None
    z: float | None = None

    @classmethod
    def failure(cls, reason: str) -> "EquationResult":
        return cls(ok=False, result_type="failure", error=reason)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok, "type": self.result_type}
        if self.error is not None:
            result_dict["error"] = self.error
        if self.roots is not None:
            result_dict["roots"] = self.roots
        if self.discriminant is not None:
            result_dict["discriminant"] = self.discriminant
        if self.complex:
            result_dict["complex"] = True
        for axis in ("x", "y", "z"):
            coordinate = getattr(self, axis)
            if coordinate is not None:
                result_dict[axis] = coordinate
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EquationResult(ok=False, error={self.error!r})"
        parts = [f"ok={self.ok}", f"result_type={self.result_type!r}"]
        if self.roots is not None:
            parts.append(f"roots={self.roots!r}")
        if self.discriminant is not None:
            parts.append(f"discriminant={self.discriminant!r}")
        if self.complex:
            parts.append("complex=True")
        for axis in ("x", "y", "z"):
            coordinate = getattr(self, axis)
            if coordinate is not None:
                parts.append(f"{axis}={coordinate!r}")
        return f"EquationResult({', '.join(parts)})"


@dataclass
class PolarCoordinates:
    r: float
    theta: float


@dataclass
class RectCoordinates:
    x: float
    y: float


@dataclass
class Dms:
    """An angle split into degrees, minutes and seconds.

    The sign of the whole angle is kept in ``negative`` so that angles
    between -1 and 0 degrees do not lose it.
    """

    degrees: int
    minutes: int
    seconds: float
    negative: bool = False


class CalculatorError(Exception):
    """Base class for every error raised by SafeCalc."""

    default_code = "CALCULATOR_ERROR"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(CalculatorError):
    """Raised when caller-supplied input is malformed."""

    default_code = "VALIDATION_ERROR"


class LexError(CalculatorError):
    """Raised when the tokenizer cannot lex the input.

    Codes: UNEXPECTED_CHARACTER, INVALID_NUMBER, UNKNOWN_IDENTIFIER.
    """

    default_code = "UNEXPECTED_CHARACTER"


class ParseError(CalculatorError):
    """Raised when the token stream does not match the grammar.

    Codes: EXPECTED_TOKEN, TRAILING_INPUT, EMPTY_INPUT, TOO_LONG, TOO_DEEP.
    """

    default_code = "EXPECTED_TOKEN"


class DomainError(CalculatorError):
    """Raised when an operand lies outside an operation's domain."""

    default_code = "DOMAIN_ERROR"


class SingularityError(CalculatorError):
    """Raised on division by zero or a singular system."""

    default_code = "SINGULARITY"


class NonFiniteResult(CalculatorError):
    """Raised when a structurally valid computation yields NaN or infinity."""

    default_code = "NON_FINITE"
