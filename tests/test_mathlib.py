"""Tests for the scientific math library."""

import math
import random
import time

import pytest

from safecalc_pkg.mathlib import (
    dec_to_dms,
    dms_to_dec,
    factorial,
    format_dms,
    from_base,
    gcd,
    ieee_pow,
    lcm,
    mod,
    ncr,
    npr,
    nth_root,
    random_int,
    random_num,
    round_half_up,
    to_base,
    to_polar,
    to_rect,
)
from safecalc_pkg.types import NonFiniteResult, ValidationError


class TestCombinatorics:
    """Factorial, permutations and combinations."""

    def test_factorial_values(self):
        assert factorial(0) == 1
        assert factorial(1) == 1
        assert factorial(5) == 120
        assert factorial(170) == pytest.approx(math.factorial(170), rel=1e-12)

    def test_factorial_above_limit_is_infinite(self):
        assert factorial(171) == math.inf

    def test_factorial_undefined(self):
        assert math.isnan(factorial(-1))
        assert math.isnan(factorial(2.5))
        assert math.isnan(factorial(math.nan))

    def test_permutations_and_combinations(self):
        assert npr(5, 2) == 20
        assert ncr(5, 2) == 10
        assert npr(5, 0) == 1
        assert ncr(5, 5) == 1

    def test_invalid_arguments(self):
        for n, r in [(2, 3), (-1, 0), (5, -1), (5.5, 2), (5, 1.5)]:
            assert math.isnan(npr(n, r))
            assert math.isnan(ncr(n, r))

    def test_large_values_overflow_to_infinity(self):
        assert ncr(2000, 1000) == math.inf
        assert npr(200, 2) == 200 * 199

    def test_huge_operands_are_bounded(self):
        start = time.time()
        assert npr(3e6, 1.5e6) == math.inf
        assert ncr(3e6, 1.5e6) == math.inf
        assert npr(1e300, 2) == math.inf
        assert ncr(1e15, 5e14) == math.inf
        assert npr(171, 171) == math.inf
        assert time.time() - start < 1.0

    def test_huge_operands_with_finite_results(self):
        assert npr(1e300, 1) == 1e300
        assert ncr(1e300, 1) == 1e300
        assert ncr(1e300, 1e300) == 1
        assert ncr(1030, 2) == 529935
        assert npr(170, 170) == pytest.approx(math.factorial(170), rel=1e-12)


class TestNumberTheory:
    """GCD, LCM, modulo and roots."""

    def test_gcd_lcm(self):
        assert gcd(12, 18) == 6
        assert lcm(4, 6) == 12
        assert gcd(-12, 18) == 6
        assert gcd(0, 7) == 7

    def test_operands_are_rounded(self):
        assert gcd(11.6, 18) == 6
        assert gcd(2.5, 5) == 1  # 2.5 rounds up to 3

    def test_lcm_with_zero(self):
        assert lcm(0, 5) == 0
        assert lcm(5, 0) == 0

    def test_true_modulo(self):
        assert mod(-1, 3) == 2
        assert mod(7, 3) == 1
        assert mod(7, -3) == -2
        assert mod(5.5, 2) == 1.5

    def test_modulo_by_zero(self):
        assert math.isnan(mod(1, 0))

    def test_modulo_non_finite_is_undefined(self):
        for a, b in [(math.inf, 3), (1, math.inf), (-math.inf, 2), (math.nan, 3), (3, math.nan)]:
            assert math.isnan(mod(a, b))

    def test_nth_root(self):
        assert nth_root(-8, 3) == -2
        assert nth_root(16, 4) == 2
        assert nth_root(27, 3) == pytest.approx(3)

    def test_nth_root_undefined(self):
        assert math.isnan(nth_root(4, 0))
        assert math.isnan(nth_root(-16, 4))

    def test_nth_root_infinite_degree(self):
        assert nth_root(8, math.inf) == 1
        assert nth_root(-8, math.inf) == -1
        assert math.isnan(nth_root(-8, math.nan))

    def test_ieee_pow(self):
        assert ieee_pow(2, 10) == 1024
        assert math.isnan(ieee_pow(-8, 1 / 3))
        assert ieee_pow(10, 400) == math.inf

    def test_round_half_up(self):
        assert round_half_up(0.1 + 0.2) == 0.3
        assert round_half_up(2.5, 0) == 3
        assert round_half_up(-2.5, 0) == -2
        assert round_half_up(1e300) == 1e300


class TestCoordinates:
    """Polar/rectangular and DMS conversions."""

    def test_to_polar(self):
        polar = to_polar(3, 4)
        assert polar.r == 5
        assert polar.theta == pytest.approx(math.atan2(4, 3))

    def test_to_polar_degrees(self):
        assert to_polar(1, 1, degrees=True).theta == pytest.approx(45)

    def test_to_rect(self):
        rect = to_rect(2, 90, degrees=True)
        assert rect.x == pytest.approx(0, abs=1e-12)
        assert rect.y == pytest.approx(2)

    def test_polar_rect_round_trip(self):
        polar = to_polar(-1.5, 2.5)
        rect = to_rect(polar.r, polar.theta)
        assert rect.x == pytest.approx(-1.5)
        assert rect.y == pytest.approx(2.5)

    def test_dec_to_dms(self):
        dms = dec_to_dms(30.2640)
        assert (dms.degrees, dms.minutes, dms.seconds) == (30, 15, 50.4)
        assert dms.negative is False

    def test_negative_angle_keeps_sign(self):
        dms = dec_to_dms(-0.5)
        assert (dms.degrees, dms.minutes, dms.seconds, dms.negative) == (0, 30, 0, True)
        assert dms_to_dec(dms.degrees, dms.minutes, dms.seconds, dms.negative) == -0.5

    def test_dms_to_dec(self):
        assert dms_to_dec(30, 15, 50.4) == pytest.approx(30.264)
        assert dms_to_dec(-10, 30, 0) == -10.5

    def test_format_dms(self):
        assert format_dms(30.264) == "30°15'50.4\""
        assert format_dms(-12.5) == "-12°30'0\""


class TestBases:
    """Base conversion."""

    def test_to_base(self):
        assert to_base(255, "HEX") == "FF"
        assert to_base(255, "OCT") == "377"
        assert to_base(5, "BIN") == "101"
        assert to_base(42.9, "DEC") == "42"
        assert to_base(-10.7, "hex") == "A"

    def test_from_base(self):
        assert from_base("ff", "HEX") == 255
        assert from_base("377", "OCT") == 255
        assert from_base("101", "BIN") == 5

    def test_invalid_digit_is_undefined(self):
        assert math.isnan(from_base("102", "BIN"))
        assert math.isnan(from_base("8", "OCT"))
        assert math.isnan(from_base("0xFF", "HEX"))
        assert math.isnan(from_base("", "DEC"))

    @pytest.mark.parametrize("base", ["DEC", "HEX", "OCT", "BIN"])
    def test_round_trip(self, base):
        rng = random.Random(base)
        for n in [0, 1, 7, 8, 255, 2**40] + [rng.randrange(10**9) for _ in range(20)]:
            assert from_base(to_base(n, base), base) == n

    def test_unknown_base(self):
        with pytest.raises(ValidationError) as exc_info:
            to_base(10, "B64")
        assert exc_info.value.code == "INVALID_BASE"

    def test_non_finite(self):
        with pytest.raises(NonFiniteResult):
            to_base(math.inf, "HEX")


class TestRandom:
    """Random number helpers."""

    def test_random_num_range(self):
        rng = random.Random(7)
        for _ in range(100):
            assert 0 <= random_num(rng) < 1

    def test_random_int_bounds(self):
        rng = random.Random(7)
        values = {random_int(1.2, 3.9, rng) for _ in range(200)}
        assert values == {2.0, 3.0}

    def test_random_int_empty_range(self):
        assert math.isnan(random_int(5, 4))
        assert math.isnan(random_int(1.2, 1.8))
