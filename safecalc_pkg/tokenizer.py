"""Lexer for the safe expression evaluator.

Turns an expression string into a flat list of :class:`Token` objects. The
lexer knows nothing about precedence; it only recognises numbers, the five
arithmetic operators, parentheses, the variable ``x`` and whitelisted
constant/function names. Everything else is rejected with a
:class:`LexError`.
"""

from __future__ import annotations

from .config import (
    ALLOWED_CONSTANTS,
    ALLOWED_FUNCTIONS,
    IDENTIFIER_CHAR_RE,
    IDENTIFIER_RE,
    MATH_PREFIX,
    NUMBER_CHAR_RE,
    VARIABLE_NAME,
)
from .types import LexError, Token, TokenType

DIGITS = "0123456789"

SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}


def _starts_number(text: str, i: int) -> bool:
    ch = text[i]
    if ch in DIGITS:
        return True
    return ch == "." and i + 1 < len(text) and text[i + 1] in DIGITS


def _read_number(text: str, i: int) -> tuple[Token, int]:
    """Read a numeric literal starting at ``i``.

    A sign is only part of the literal when it follows an exponent marker,
    so ``1e-5`` is one number while ``1-5`` is three tokens.
    """
    start = i
    while i < len(text) and NUMBER_CHAR_RE.match(text[i]):
        if text[i] in "+-" and i > start and text[i - 1] not in "eE":
            break
        i += 1
    literal = text[start:i]
    try:
        value = float(literal)
    except ValueError:
        raise LexError(f"Invalid number: {literal}", code="INVALID_NUMBER") from None
    return Token(TokenType.NUMBER, value), i


def _is_variable(text: str, i: int) -> bool:
    if text[i] != VARIABLE_NAME:
        return False
    return i + 1 >= len(text) or not IDENTIFIER_CHAR_RE.match(text[i + 1])


def _read_identifier(text: str, i: int, variable_enabled: bool) -> tuple[Token, int]:
    match = IDENTIFIER_RE.match(text, i)
    ident = match.group(0)
    name = ident[len(MATH_PREFIX):] if ident.startswith(MATH_PREFIX) else ident

    if name in ALLOWED_CONSTANTS:
        return Token(TokenType.NUMBER, ALLOWED_CONSTANTS[name]), match.end()
    if variable_enabled and name in ALLOWED_FUNCTIONS:
        return Token(TokenType.FUNCTION, name), match.end()
    raise LexError(f"Unknown identifier: {ident}", code="UNKNOWN_IDENTIFIER")


def tokenize(text: str, variable_enabled: bool = False) -> list[Token]:
    """Split an expression into tokens.

    Args:
        text: Expression string using ASCII operators (``**`` for power)
        variable_enabled: Allow the variable ``x`` and whitelisted functions

    Returns:
        List of tokens, always terminated by an EOF token

    Raises:
        LexError: On an unexpected character, malformed number or unknown name
    """
    tokens: list[Token] = []
    i = 0
    while i < len(text):
        ch = text[i]

        if ch.isspace():
            i += 1
            continue

        if _starts_number(text, i):
            token, i = _read_number(text, i)
            tokens.append(token)
            continue

        # ** must win over a single *
        if text.startswith("**", i):
            tokens.append(Token(TokenType.POWER))
            i += 2
            continue

        if ch in SINGLE_CHAR_TOKENS:
            tokens.append(Token(SINGLE_CHAR_TOKENS[ch]))
            i += 1
            continue

        if variable_enabled and _is_variable(text, i):
            tokens.append(Token(TokenType.VARIABLE, VARIABLE_NAME))
            i += 1
            continue

        if ch.isascii() and ch.isalpha():
            token, i = _read_identifier(text, i, variable_enabled)
            tokens.append(token)
            continue

        raise LexError(f"Unexpected character: {ch}", code="UNEXPECTED_CHARACTER")

    tokens.append(Token(TokenType.EOF))
    return tokens
