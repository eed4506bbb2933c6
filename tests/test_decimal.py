"""
test_decimal.py — Test suite for the Decimal domain primitive

================================================================================
TEST STRUCTURE
================================================================================

1. UNIT TESTS
   Deterministic tests for specific cases and edge cases.

2. PROPERTY-BASED TESTS (Hypothesis)
   Tests that check PROPERTIES which must hold for ANY input.
   Hypothesis generates thousands of random cases looking for a
   counterexample.

3. INVARIANT TESTS
   Tests that check the invariants declared in the code (canonical zero,
   38-digit cap, hash/equality agreement) actually hold.

================================================================================
"""

import dataclasses
import math
import numbers
from fractions import Fraction

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from decimal38 import (
    Decimal,
    DecimalOverflow,
    OutOfRange,
    PrecisionOverflow,
    RoundingMode,
    parse,
)

MAX = 10 ** 38 - 1


# ==============================================================================
# TEST HELPERS
# ==============================================================================

@st.composite
def decimal_strategy(draw, max_magnitude=MAX, max_scale=38):
    """Random valid Decimal for property testing."""
    magnitude = draw(st.integers(min_value=0, max_value=max_magnitude))
    scale = draw(st.integers(min_value=0, max_value=max_scale))
    negative = draw(st.booleans())
    return Decimal.from_parts(magnitude, scale, negative)


def exact(value: Decimal) -> Fraction:
    return Fraction(str(value))


# ==============================================================================
# UNIT TESTS: Required scenarios
# ==============================================================================

class TestScenarios:
    """Concrete end-to-end cases."""

    def test_add_small_integers(self):
        assert str(parse("123") + parse("456")) == "579"

    def test_multiply_keeps_every_digit(self):
        product = parse("123456789.987654321") * parse("987654321.123456789")
        assert str(product) == "121932632103337905.662094193112635269"

    def test_codec_round_trip(self):
        value = parse("123456789.987654321")
        decoded = Decimal.decode(value.encode())
        assert decoded.as_tuple() == value.as_tuple()
        assert str(decoded) == "123456789.987654321"

    def test_parse_equals_int_conversion(self):
        for n in (0, 1, 7, 123, 65535, -42):
            assert parse(str(n)) == Decimal.of(n)

    def test_negative_zero_is_canonical(self):
        a, b = parse("-0.00"), parse("0.00")
        assert a == b
        assert str(a) == "0"
        assert str(b) == "0"
        assert a.as_tuple() == (False, 0, 0)


# ==============================================================================
# UNIT TESTS: Constructors
# ==============================================================================

class TestConstructors:
    """Tests for Decimal constructors."""

    def test_from_parts(self):
        d = Decimal.from_parts(1250, 2, True)
        assert str(d) == "-12.50"
        assert d.magnitude == 1250
        assert d.scale == 2
        assert d.negative

    def test_from_parts_rejects_39_digits(self):
        with pytest.raises(OutOfRange):
            Decimal.from_parts(10 ** 38)

    def test_from_parts_rejects_scale_above_38(self):
        with pytest.raises(OutOfRange):
            Decimal.from_parts(1, 39)

    def test_from_parts_rejects_negative_magnitude(self):
        with pytest.raises(OutOfRange):
            Decimal.from_parts(-5)

    def test_out_of_range_is_precision_overflow_and_value_error(self):
        assert issubclass(OutOfRange, PrecisionOverflow)
        assert issubclass(OutOfRange, ValueError)

    def test_from_parts_rejects_non_int(self):
        with pytest.raises(TypeError):
            Decimal.from_parts(1.5)

    def test_zero_parts_are_canonicalised(self):
        assert Decimal.from_parts(0, 5, True).as_tuple() == (False, 0, 0)

    def test_of_accepts_int_str_decimal(self):
        d = parse("1.5")
        assert Decimal.of(d) is d
        assert Decimal.of("1.5") == d
        assert Decimal.of(3) == parse("3")

    def test_of_rejects_float(self):
        with pytest.raises(TypeError, match="from_float"):
            Decimal.of(1.5)

    def test_of_rejects_other_types(self):
        with pytest.raises(TypeError):
            Decimal.of([1])

    def test_zero_and_one(self):
        assert Decimal.zero().is_zero()
        assert str(Decimal.one()) == "1"

    def test_immutable(self):
        d = parse("1.5")
        with pytest.raises(dataclasses.FrozenInstanceError):
            d._magnitude = 2

    def test_registered_as_number(self):
        assert isinstance(parse("1"), numbers.Number)


# ==============================================================================
# UNIT TESTS: Accessors
# ==============================================================================

class TestAccessors:

    def test_precision(self):
        assert parse("123.45").precision == 5
        assert parse("0.001").precision == 1
        assert Decimal.zero().precision == 1

    def test_predicates(self):
        assert parse("-1").is_negative()
        assert parse("1").is_positive()
        assert not Decimal.zero().is_positive()
        assert not Decimal.zero().is_negative()

    def test_bool(self):
        assert not parse("0.000")
        assert parse("0.001")

    def test_repr(self):
        assert repr(parse("-1.50")) == "Decimal('-1.50')"


# ==============================================================================
# UNIT TESTS: Comparison and hashing
# ==============================================================================

class TestComparison:

    def test_equal_across_scales(self):
        assert parse("1.50") == parse("1.5")
        assert hash(parse("1.50")) == hash(parse("1.5"))

    def test_equal_to_int(self):
        assert parse("5.00") == 5
        assert hash(parse("5.00")) == hash(5)
        assert parse("-3") == -3

    def test_not_equal_to_float(self):
        assert (parse("0.5") == 0.5) is False

    def test_ordering(self):
        assert parse("-1") < parse("0.5") < parse("0.51")
        assert parse("2") >= 2
        assert parse("1.9") <= 2

    def test_ordering_with_float_raises(self):
        with pytest.raises(TypeError):
            parse("1") < 1.5

    def test_compare(self):
        assert parse("1.0").compare(parse("1")) == 0
        assert parse("-2").compare(1) == -1
        assert parse("2").compare(parse("1.99")) == 1

    def test_usable_as_dict_key(self):
        prices = {parse("1.50"): "a"}
        assert prices[parse("1.5")] == "a"


# ==============================================================================
# UNIT TESTS: Scale manipulation
# ==============================================================================

class TestScale:

    def test_normalize(self):
        assert str(parse("1.500").normalize()) == "1.5"
        assert str(parse("100").normalize()) == "100"
        assert str(parse("-0.0").normalize()) == "0"

    def test_rescale_pads(self):
        assert str(parse("1.5").rescale(3)) == "1.500"

    def test_rescale_rounds(self):
        assert str(parse("1.555").rescale(2)) == "1.56"
        assert str(parse("1.555").rescale(2, RoundingMode.DOWN)) == "1.55"

    def test_rescale_beyond_budget(self):
        with pytest.raises(PrecisionOverflow):
            parse("9" * 38).rescale(1)

    def test_rescale_invalid_scale(self):
        with pytest.raises(OutOfRange):
            parse("1").rescale(39)

    def test_round(self):
        assert str(parse("1.2345").round(2)) == "1.23"
        assert str(parse("1.235").round(2)) == "1.24"
        assert str(parse("-1.235").round(2)) == "-1.24"
        assert str(parse("1.5").round(3)) == "1.5"

    def test_round_negative_scale(self):
        assert str(parse("1234.5").round(-2)) == "1200"
        assert str(parse("1250").round(-2)) == "1300"

    def test_round_carry_overflow(self):
        with pytest.raises(DecimalOverflow):
            parse("9" * 38).round(-1)

    def test_trunc_floor_ceil(self):
        assert str(parse("-1.99").trunc(1)) == "-1.9"
        assert str(parse("-1.5").floor()) == "-2"
        assert str(parse("-1.5").ceil()) == "-1"
        assert str(parse("1.5").floor()) == "1"
        assert str(parse("1.2").ceil()) == "2"

    @pytest.mark.parametrize(
        "text, precision, scale, expected",
        [
            ("123.456", 6, 2, "123.46"),
            ("123.456", 6, 1, "123.5"),
            ("123456", 5, -1, "123460"),
            ("123456", 5, -6, "0"),
            ("-0.0049", 3, 2, "0"),
        ],
    )
    def test_round_with_precision(self, text, precision, scale, expected):
        assert str(parse(text).round_with_precision(precision, scale)) == expected

    @pytest.mark.parametrize(
        "text, precision, scale",
        [
            ("123.456", 6, 4),
            ("123456", 5, 0),
            ("99.995", 4, 2),
        ],
    )
    def test_round_with_precision_overflow(self, text, precision, scale):
        with pytest.raises(DecimalOverflow):
            parse(text).round_with_precision(precision, scale)


# ==============================================================================
# UNIT TESTS: Python numeric protocols
# ==============================================================================

class TestProtocols:

    def test_int_truncates(self):
        assert int(parse("-7.9")) == -7
        assert int(parse("7.9")) == 7
        assert math.trunc(parse("-1.5")) == -1

    def test_round_builtin_is_half_up(self):
        assert round(parse("2.5")) == 3
        assert round(parse("-2.5")) == -3
        assert round(parse("1.2345"), 2) == parse("1.23")
        assert isinstance(round(parse("1.5")), int)

    def test_floor_ceil_builtin(self):
        assert math.floor(parse("-1.5")) == -2
        assert math.ceil(parse("-1.5")) == -1

    def test_float(self):
        assert float(parse("0.1")) == 0.1

    def test_sum_and_prod(self):
        values = [parse("0.1"), parse("0.2"), parse("0.3")]
        assert sum(values) == parse("0.6")
        assert math.prod([parse("1.5"), parse("2"), 3]) == 9


# ==============================================================================
# UNIT TESTS: Serialization
# ==============================================================================

class TestSerialization:

    def test_to_dict(self):
        assert parse("-12.50").to_dict() == {"magnitude": 1250, "scale": 2, "negative": True}

    def test_from_dict(self):
        d = Decimal.from_dict({"magnitude": 1250, "scale": 2, "negative": True})
        assert str(d) == "-12.50"

    def test_from_dict_missing_key(self):
        with pytest.raises(ValueError, match="Missing key"):
            Decimal.from_dict({"scale": 2})

    def test_from_dict_validates(self):
        with pytest.raises(OutOfRange):
            Decimal.from_dict({"magnitude": 1, "scale": 40, "negative": False})


# ==============================================================================
# PROPERTY-BASED TESTS (Hypothesis)
# ==============================================================================

class TestRepresentationProperties:

    @given(d=decimal_strategy())
    @settings(max_examples=500)
    def test_text_round_trip(self, d: Decimal):
        """parse(str(d)) reproduces the parts exactly."""
        assert parse(str(d)).as_tuple() == d.as_tuple()

    @given(d=decimal_strategy())
    @settings(max_examples=300)
    def test_dict_round_trip(self, d: Decimal):
        assert Decimal.from_dict(d.to_dict()).as_tuple() == d.as_tuple()

    @given(d=decimal_strategy())
    @settings(max_examples=300)
    def test_normalize_preserves_value_and_hash(self, d: Decimal):
        n = d.normalize()
        assert n == d
        assert hash(n) == hash(d)

    @given(a=decimal_strategy(), b=decimal_strategy())
    @settings(max_examples=500)
    def test_ordering_matches_exact_value(self, a: Decimal, b: Decimal):
        assert (a < b) == (exact(a) < exact(b))
        assert (a == b) == (exact(a) == exact(b))

    @given(d=decimal_strategy())
    @settings(max_examples=300)
    def test_zero_is_canonical(self, d: Decimal):
        if d.is_zero():
            assert d.as_tuple() == (False, 0, 0)
