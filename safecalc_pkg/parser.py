"""Recursive-descent parser and evaluator.

Grammar, lowest to highest binding power::

    expression := term (('+' | '-') term)*
    term       := power (('*' | '/') power)*
    power      := unary ('**' power)?
    unary      := ('-' | '+') unary | call
    call       := FUNCTION '(' expression ')' | atom
    atom       := NUMBER | VARIABLE | '(' expression ')'

Values are computed during descent; no syntax tree is kept. Because ``unary``
sits inside ``power``'s left operand, a leading sign binds tighter than
``**``: ``-2**2`` is ``(-2)**2 == 4``.
"""

from __future__ import annotations

import math
from typing import Callable

from .config import ALLOWED_FUNCTIONS, MAX_INPUT_LENGTH, MAX_NESTING_DEPTH
from .logging_config import get_logger
from .mathlib import ieee_pow
from .tokenizer import tokenize
from .types import ParseError, Token, TokenType, ValidationError

logger = get_logger("parser")


class Parser:
    """Evaluates one token sequence. Not reusable across calls."""

    def __init__(self, tokens: list[Token], variable_value: float = 0.0):
        self.tokens = tokens
        self.pos = 0
        self.variable_value = variable_value
        self.division_by_zero = False
        self.depth = 0
        self.result: float | None = None

    def peek(self) -> Token:
        return self.tokens[self.pos]

    def consume(self, expected: TokenType | None = None) -> Token:
        token = self.tokens[self.pos]
        if expected is not None and token.type is not expected:
            raise ParseError(
                f"Expected {expected.value}, got {token.type.value}",
                code="EXPECTED_TOKEN",
            )
        self.pos += 1
        return token

    def nested(self) -> float:
        """Parse a parenthesised expression body, bounding the nesting depth."""
        self.depth += 1
        if self.depth > MAX_NESTING_DEPTH:
            raise ParseError(
                f"Expression nested too deeply (max {MAX_NESTING_DEPTH} levels)",
                code="TOO_DEEP",
            )
        result = self.expression()
        self.depth -= 1
        return result

    def parse(self) -> float:
        result = self.expression()
        if self.peek().type is not TokenType.EOF:
            raise ParseError(
                "Unexpected tokens after expression", code="TRAILING_INPUT"
            )
        self.result = result
        return result

    def expression(self) -> float:
        left = self.term()
        while self.peek().type in (TokenType.PLUS, TokenType.MINUS):
            op = self.consume()
            right = self.term()
            left = left + right if op.type is TokenType.PLUS else left - right
        return left

    def term(self) -> float:
        left = self.power()
        while self.peek().type in (TokenType.MULTIPLY, TokenType.DIVIDE):
            op = self.consume()
            right = self.power()
            if op.type is TokenType.DIVIDE and right == 0:
                # The rest of this multiplicative chain is left unparsed.
                self.division_by_zero = True
                logger.debug("Division by zero at token %d", self.pos)
                return math.inf
            left = left * right if op.type is TokenType.MULTIPLY else left / right
        return left

    def power(self) -> float:
        base = self.unary()
        if self.peek().type is TokenType.POWER:
            self.consume()
            exponent = self.power()
            return ieee_pow(base, exponent)
        return base

    def unary(self) -> float:
        if self.peek().type is TokenType.MINUS:
            self.consume()
            return -self.unary()
        if self.peek().type is TokenType.PLUS:
            self.consume()
            return self.unary()
        return self.call()

    def call(self) -> float:
        if self.peek().type is TokenType.FUNCTION:
            name = self.consume().value
            self.consume(TokenType.LPAREN)
            argument = self.nested()
            self.consume(TokenType.RPAREN)
            return ALLOWED_FUNCTIONS[name](argument)
        return self.atom()

    def atom(self) -> float:
        token = self.peek()
        if token.type is TokenType.NUMBER:
            self.consume()
            return token.value
        if token.type is TokenType.VARIABLE:
            self.consume()
            return self.variable_value
        if token.type is TokenType.LPAREN:
            self.consume()
            result = self.nested()
            self.consume(TokenType.RPAREN)
            return result
        raise ParseError(
            f"Expected number, variable or '(', got {token.type.value}",
            code="EXPECTED_TOKEN",
        )


def prepare(text: str) -> str:
    """Check length and emptiness of raw input and return it stripped.

    Raises:
        ValidationError: If ``text`` is not a string
        ParseError: TOO_LONG or EMPTY_INPUT
    """
    if not isinstance(text, str):
        raise ValidationError("Expression must be a string")
    if len(text) > MAX_INPUT_LENGTH:
        raise ParseError(
            f"Expression too long (max {MAX_INPUT_LENGTH} characters)",
            code="TOO_LONG",
        )
    stripped = text.strip()
    if not stripped:
        raise ParseError("Empty expression", code="EMPTY_INPUT")
    return stripped


def parse_expression(text: str) -> Parser:
    """Evaluate ``text`` and return the finished parser.

    The caller reads the value from ``parser.result`` and can inspect
    ``parser.division_by_zero``.
    """
    parser = Parser(tokenize(prepare(text), variable_enabled=False))
    parser.parse()
    return parser


def evaluate(text: str) -> float:
    """Safely evaluate an arithmetic expression.

    Only numbers, ``+ - * / **``, parentheses and the constants PI, E, LN2
    and LN10 are accepted.

    Args:
        text: Expression string (e.g., "2 ** 3 ** 2")

    Returns:
        The value as a float; may be NaN or infinite

    Raises:
        LexError, ParseError, ValidationError
    """
    return parse_expression(text).result


def make_function(text: str) -> Callable[[float], float]:
    """Build a function of ``x`` from an expression string.

    The expression is checked once with ``x = 1`` so that lexical and syntax
    errors surface here. The returned callable tokenizes and parses afresh
    on every call and shares no state between calls.

    Args:
        text: Expression using ``x`` and whitelisted functions (e.g., "sin(x) + 1")

    Returns:
        Callable mapping a float to a float

    Raises:
        LexError, ParseError, ValidationError
    """
    expression = prepare(text)
    Parser(tokenize(expression, variable_enabled=True), 1.0).parse()

    def numeric_function(x: float) -> float:
        return Parser(tokenize(expression, variable_enabled=True), float(x)).parse()

    return numeric_function
