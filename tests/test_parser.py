"""Unit tests for the parser and evaluator."""

import math
import random
import unittest

import sympy as sp
from sympy.parsing.sympy_parser import parse_expr

from safecalc_pkg.config import MAX_NESTING_DEPTH
from safecalc_pkg.parser import Parser, evaluate, make_function, parse_expression
from safecalc_pkg.tokenizer import tokenize
from safecalc_pkg.types import LexError, ParseError, ValidationError


def random_expression(rng, depth=0):
    """Build a random expression without unary signs, so standard precedence applies."""
    if depth > 3 or rng.random() < 0.3:
        return str(rng.randint(1, 9))
    choice = rng.random()
    if choice < 0.15:
        # Small powers keep the reference evaluator fast
        return f"{rng.randint(1, 4)} ** {rng.randint(0, 3)}"
    if choice < 0.3:
        return f"({random_expression(rng, depth + 1)})"
    op = rng.choice(["+", "-", "*", "/"])
    return f"{random_expression(rng, depth + 1)} {op} {random_expression(rng, depth + 1)}"


class TestPrecedence(unittest.TestCase):
    """Test operator precedence and associativity."""

    def test_basic_arithmetic(self):
        self.assertEqual(evaluate("2+3*4"), 14)
        self.assertEqual(evaluate("(2+3)*4"), 20)
        self.assertEqual(evaluate("10-4-3"), 3)
        self.assertEqual(evaluate("100/10/5"), 2)

    def test_power_is_right_associative(self):
        self.assertEqual(evaluate("2 ** 3 ** 2"), 512)

    def test_power_binds_tighter_than_multiply(self):
        self.assertEqual(evaluate("3 * 2 ** 2"), 12)

    def test_unary_binds_tighter_than_power(self):
        # The sign belongs to the base: (-2)**2
        self.assertEqual(evaluate("-2 ** 2"), 4)
        self.assertEqual(evaluate("-2 ** 3"), -8)
        self.assertEqual(evaluate("0 - 2 ** 2"), -4)

    def test_exponent_may_carry_sign(self):
        self.assertEqual(evaluate("2 ** -1"), 0.5)

    def test_repeated_unary(self):
        self.assertEqual(evaluate("--3"), 3)
        self.assertEqual(evaluate("+-+3"), -3)

    def test_constants(self):
        self.assertAlmostEqual(evaluate("2 * PI"), 2 * math.pi)
        self.assertAlmostEqual(evaluate("Math.E ** 2"), math.e**2)

    def test_agrees_with_reference_evaluator(self):
        rng = random.Random(1234)
        checked = 0
        for _ in range(300):
            text = random_expression(rng)
            expected = parse_expr(text)
            if not expected.is_finite:
                continue
            actual = evaluate(text)
            self.assertTrue(
                math.isclose(actual, float(expected), rel_tol=1e-9, abs_tol=1e-9),
                f"{text}: {actual} != {expected}",
            )
            checked += 1
        self.assertGreater(checked, 150)


class TestDivisionByZero(unittest.TestCase):
    """Division by exactly zero returns infinity for the current term."""

    def test_plain_division_by_zero(self):
        self.assertEqual(evaluate("1/0"), math.inf)
        self.assertEqual(evaluate("0/0"), math.inf)
        self.assertEqual(evaluate("-1/0"), math.inf)

    def test_additive_chain_continues(self):
        self.assertEqual(evaluate("1/0 + 5"), math.inf)

    def test_rest_of_multiplicative_chain_is_dropped(self):
        # "* 3" is never consumed, so the parser reports trailing input
        with self.assertRaises(ParseError) as ctx:
            evaluate("1/0*3")
        self.assertEqual(ctx.exception.code, "TRAILING_INPUT")

    def test_flag_recorded(self):
        self.assertTrue(parse_expression("2/(1-1)").division_by_zero)
        self.assertFalse(parse_expression("2/4").division_by_zero)


class TestPowerSemantics(unittest.TestCase):
    """Power follows IEEE pow, never complex numbers or exceptions."""

    def test_negative_base_fractional_exponent(self):
        self.assertTrue(math.isnan(evaluate("(0-8) ** 0.5")))

    def test_overflow(self):
        self.assertEqual(evaluate("10 ** 400"), math.inf)

    def test_zero_to_negative(self):
        self.assertEqual(evaluate("0 ** -1"), math.inf)


class TestErrors(unittest.TestCase):
    """Test error reporting."""

    def test_empty_input(self):
        for text in ("", "   "):
            with self.assertRaises(ParseError) as ctx:
                evaluate(text)
            self.assertEqual(ctx.exception.code, "EMPTY_INPUT")

    def test_too_long(self):
        with self.assertRaises(ParseError) as ctx:
            evaluate("1+" * 100 + "1")
        self.assertEqual(ctx.exception.code, "TOO_LONG")

    def test_length_limit_is_inclusive(self):
        text = "1+" * 99 + "11"
        self.assertEqual(len(text), 200)
        self.assertEqual(evaluate(text), 110)

    def test_missing_paren(self):
        with self.assertRaises(ParseError) as ctx:
            evaluate("(1+2")
        self.assertEqual(ctx.exception.code, "EXPECTED_TOKEN")

    def test_extra_paren(self):
        with self.assertRaises(ParseError) as ctx:
            evaluate("1+2)")
        self.assertEqual(ctx.exception.code, "TRAILING_INPUT")

    def test_nesting_at_limit(self):
        depth = MAX_NESTING_DEPTH
        self.assertEqual(evaluate("(" * depth + "2" + ")" * depth), 2)

    def test_nesting_too_deep(self):
        depth = MAX_NESTING_DEPTH + 1
        for text in ("(" * 200, "(" * depth + "1" + ")" * depth):
            with self.assertRaises(ParseError) as ctx:
                evaluate(text)
            self.assertEqual(ctx.exception.code, "TOO_DEEP")

    def test_function_calls_count_towards_nesting(self):
        depth = MAX_NESTING_DEPTH + 1
        with self.assertRaises(ParseError) as ctx:
            make_function("(" * (depth - 6) + "abs(" * 6 + "x" + ")" * depth)
        self.assertEqual(ctx.exception.code, "TOO_DEEP")

    def test_dangling_operator(self):
        with self.assertRaises(ParseError) as ctx:
            evaluate("2 +")
        self.assertEqual(ctx.exception.code, "EXPECTED_TOKEN")

    def test_adjacent_numbers(self):
        with self.assertRaises(ParseError) as ctx:
            evaluate("2 3")
        self.assertEqual(ctx.exception.code, "TRAILING_INPUT")

    def test_non_string(self):
        with self.assertRaises(ValidationError):
            evaluate(42)

    def test_functions_rejected_without_variable_mode(self):
        with self.assertRaises(LexError):
            evaluate("sqrt(4)")


class TestMakeFunction(unittest.TestCase):
    """Test functions of x built from expressions."""

    def test_sin_plus_one(self):
        self.assertEqual(make_function("sin(x) + 1")(0), 1)

    def test_polynomial(self):
        f = make_function("x ** 2 - 3 * x + 2")
        self.assertEqual(f(1), 0)
        self.assertEqual(f(2), 0)
        self.assertEqual(f(5), 12)

    def test_whitelisted_functions(self):
        f = make_function("sqrt(x) + cbrt(x) + log10(x)")
        self.assertAlmostEqual(f(1000), math.sqrt(1000) + 10 + 3)
        self.assertEqual(make_function("abs(x)")(-3), 3)
        self.assertEqual(make_function("sign(x)")(-3), -1)
        self.assertEqual(make_function("Math.floor(x)")(2.7), 2)

    def test_round_is_half_up(self):
        f = make_function("round(x)")
        self.assertEqual(f(2.5), 3)
        self.assertEqual(f(-2.5), -2)

    def test_out_of_domain_function_gives_nan(self):
        self.assertTrue(math.isnan(make_function("log(x)")(-1)))
        self.assertTrue(math.isnan(make_function("asin(x)")(2)))

    def test_calls_are_independent(self):
        f = make_function("x * 2")
        self.assertEqual([f(i) for i in range(4)], [0, 2, 4, 6])
        self.assertEqual(f(1.5), 3)

    def test_invalid_expression_fails_eagerly(self):
        with self.assertRaises(LexError):
            make_function("y + 1")
        with self.assertRaises(ParseError):
            make_function("sin x")
        with self.assertRaises(ParseError):
            make_function("")

    def test_function_argument_needs_parentheses(self):
        with self.assertRaises(ParseError) as ctx:
            make_function("sqrt 4")
        self.assertEqual(ctx.exception.code, "EXPECTED_TOKEN")


class TestParserState(unittest.TestCase):
    """Test the parser object directly."""

    def test_variable_defaults_to_zero(self):
        parser = Parser(tokenize("x + 1", variable_enabled=True))
        self.assertEqual(parser.parse(), 1)

    def test_result_recorded(self):
        parser = Parser(tokenize("6 / 3"))
        parser.parse()
        self.assertEqual(parser.result, 2)

    def test_exact_arithmetic_check(self):
        # Sanity check of the reference oracle itself
        self.assertEqual(parse_expr("2**3**2"), sp.Integer(512))


if __name__ == "__main__":
    unittest.main()
