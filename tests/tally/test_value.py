"""Tests for Tally literal values and canonicalization."""

import math

import pytest

from tally import EPSILON, TallyFloat, TallyInteger, literal_from_float
from tally.tally_value import canonicalize, format_float, integer_or_float


class TestCanonicalization:
    """Test conversion of computed floats into literals."""

    @pytest.mark.parametrize("value,expected", [
        (2.0, TallyInteger(2)),
        (-7.0, TallyInteger(-7)),
        (0.0, TallyInteger(0)),
        (-0.0, TallyInteger(0)),
        (2.5, TallyFloat(2.5)),
        (-0.1, TallyFloat(-0.1)),
        (1e-17, TallyInteger(0)),
        (9007199254740992.0, TallyInteger(9007199254740992)),
        (-9223372036854775808.0, TallyInteger(-9223372036854775808)),
    ])
    def test_literal_from_float(self, value, expected):
        """Test that near-integral floats become integers."""
        result = literal_from_float(value)
        assert result == expected
        assert type(result) is type(expected)

    def test_out_of_range_stays_float(self):
        """Test that integral floats beyond 64 bits stay floats."""
        assert literal_from_float(1e19) == TallyFloat(1e19)
        assert literal_from_float(-1e19) == TallyFloat(-1e19)
        assert literal_from_float(9223372036854775808.0) == TallyFloat(9223372036854775808.0)

    def test_non_finite_stays_float(self):
        """Test that NaN and infinities are left as floats."""
        assert isinstance(literal_from_float(math.inf), TallyFloat)
        assert isinstance(literal_from_float(-math.inf), TallyFloat)
        assert math.isnan(literal_from_float(math.nan).value)

    def test_canonicalize_leaves_integers_alone(self):
        """Test canonicalize on both literal kinds."""
        assert canonicalize(TallyInteger(4)) == TallyInteger(4)
        assert canonicalize(TallyFloat(4.0)) == TallyInteger(4)
        assert canonicalize(TallyFloat(4.5)) == TallyFloat(4.5)

    def test_integer_or_float_promotes(self):
        """Test that integers outside 64 bits are promoted."""
        assert integer_or_float(2 ** 63 - 1) == TallyInteger(2 ** 63 - 1)
        assert integer_or_float(2 ** 63) == TallyFloat(9223372036854775808.0)


class TestEquality:
    """Test literal equality rules."""

    def test_tags_must_match(self):
        """Test that integers never equal floats."""
        assert TallyInteger(2) != TallyFloat(2.0)
        assert TallyFloat(2.0) != TallyInteger(2)

    def test_integer_equality_is_exact(self):
        """Test integer comparison."""
        assert TallyInteger(5) == TallyInteger(5)
        assert TallyInteger(5) != TallyInteger(6)

    def test_float_equality_uses_epsilon(self):
        """Test that floats within EPSILON compare equal."""
        assert TallyFloat(0.1 + 0.2) == TallyFloat(0.3)
        assert TallyFloat(1.0) == TallyFloat(1.0 + EPSILON)
        assert TallyFloat(1.0) != TallyFloat(1.0 + 1e-10)

    def test_equal_floats_hash_equal(self):
        """Test that floats equal within EPSILON collapse in a set."""
        a = TallyFloat(0.1 + 0.2)
        b = TallyFloat(0.3)
        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1
        assert len({TallyFloat(1.0), TallyFloat(2.5)}) == 2

    def test_not_equal_to_python_numbers(self):
        """Test that literals do not compare equal to plain numbers."""
        assert TallyInteger(1) != 1
        assert TallyFloat(1.5) != 1.5


class TestRendering:
    """Test the canonical string form of literals."""

    @pytest.mark.parametrize("literal,expected", [
        (TallyInteger(55), "55"),
        (TallyInteger(-3), "-3"),
        (TallyFloat(102.2), "102.2"),
        (TallyFloat(0.00004), "0.00004"),
        (TallyFloat(1e-05), "0.00001"),
        (TallyFloat(-2.5), "-2.5"),
        (TallyFloat(0.30000000000000004), "0.30000000000000004"),
        (TallyFloat(1e20), "100000000000000000000"),
        (TallyFloat(math.pi), "3.141592653589793"),
    ])
    def test_str(self, literal, expected):
        """Test rendering never uses exponent notation."""
        assert str(literal) == expected

    def test_non_finite_rendering(self):
        """Test rendering of special values."""
        assert format_float(math.inf) == "inf"
        assert format_float(-math.inf) == "-inf"
        assert format_float(math.nan) == "nan"

    def test_repr(self):
        """Test debug representation shows the tag."""
        assert repr(TallyInteger(3)) == "TallyInteger(3)"
        assert repr(TallyFloat(2.5)) == "TallyFloat(2.5)"


class TestNegation:
    """Test sign flipping of literals."""

    def test_negate_preserves_tag(self):
        """Test that negation keeps integers and floats apart."""
        assert TallyInteger(5).negate() == TallyInteger(-5)
        assert TallyFloat(2.5).negate() == TallyFloat(-2.5)

    def test_negate_minimum_integer_promotes(self):
        """Test that negating the minimum 64-bit integer becomes a float."""
        result = TallyInteger(-2 ** 63).negate()
        assert result == TallyFloat(9223372036854775808.0)

    def test_helpers(self):
        """Test conversion helpers."""
        assert TallyInteger(3).as_float() == 3.0
        assert TallyInteger(3).is_integer()
        assert not TallyFloat(3.5).is_integer()
        assert TallyInteger(3).type_name() == "integer"
        assert TallyFloat(3.5).type_name() == "float"
