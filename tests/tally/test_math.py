"""Tests for arithmetic, logarithm and comparison functions."""

import math

import pytest

from tally import (
    TallyDivisionByZeroError, TallyFloat, TallyFunctionName, TallyInteger,
    TallyInvalidFactorialArgumentError, TallyInvalidSquareRootError, TallyResultTooBigError
)


class TestArithmetic:
    """Test the arithmetic operators and their function forms."""

    @pytest.mark.parametrize("expression,expected", [
        ("1 + 2", TallyInteger(3)),
        ("1.5 + 1.5", TallyInteger(3)),
        ("0.1 + 0.2", TallyFloat(0.30000000000000004)),
        ("1 - 2.5", TallyFloat(-1.5)),
        ("2 * 3.5", TallyInteger(7)),
        ("6 / 3", TallyInteger(2)),
        ("7 / 2", TallyFloat(3.5)),
        ("1 / 3", TallyFloat(1 / 3)),
        ("7 % 3", TallyInteger(1)),
        ("-7 % 3", TallyInteger(-1)),
        ("7 % -3", TallyInteger(1)),
        ("7.5 % 2", TallyFloat(1.5)),
        ("multiply(4, 0.25)", TallyInteger(1)),
        ("subtract(10, 0.5)", TallyFloat(9.5)),
    ])
    def test_arithmetic(self, helpers, expression, expected):
        """Test arithmetic with integer and float operands."""
        result = helpers.run(expression)
        assert result == expected
        assert type(result) is type(expected)

    @pytest.mark.parametrize("expression", [
        "1 / 0",
        "1 % 0",
        "div(5, 0.0)",
        "mod(2.5, 0)",
        "1 / (2 - 2)",
        "0 / 0",
    ])
    def test_division_by_zero(self, helpers, expression):
        """Test that a zero divisor is rejected before dividing."""
        with pytest.raises(TallyDivisionByZeroError):
            helpers.run(expression)

    @pytest.mark.parametrize("expression", [
        "1e308 * 10",
        "1e308 + 1e308",
        "-1e308 - 1e308",
        "1e308 / 0.1",
    ])
    def test_overflow(self, helpers, expression):
        """Test that infinite results are rejected."""
        with pytest.raises(TallyResultTooBigError):
            helpers.run(expression)

    def test_overflow_error_details(self, helpers):
        """Test that the failing function and its arguments are recorded."""
        with pytest.raises(TallyResultTooBigError) as exc_info:
            helpers.run("1e308 * 10")

        assert exc_info.value.function_name is TallyFunctionName.MULTIPLY
        assert len(exc_info.value.args_list) == 2


class TestPower:
    """Test exponentiation."""

    @pytest.mark.parametrize("expression,expected", [
        ("2 ^ 10", TallyInteger(1024)),
        ("pow(2, 0.5)", TallyFloat(math.sqrt(2))),
        ("2 ^ -1", TallyFloat(0.5)),
        ("pow(25, 2.5)", TallyInteger(3125)),
        ("(-2) ^ 3", TallyInteger(-8)),
        ("0 ^ 0", TallyInteger(1)),
        ("pow(10, -400)", TallyInteger(0)),
    ])
    def test_power(self, helpers, expression, expected):
        """Test power results."""
        assert helpers.run(expression) == expected

    @pytest.mark.parametrize("expression", [
        "pow(-8, 1 / 3)",
        "pow(0, -1)",
        "pow(10, 400)",
        "pow(2, -1074)",
    ])
    def test_invalid_power(self, helpers, expression):
        """Test that NaN, infinite and subnormal powers are rejected."""
        with pytest.raises(TallyResultTooBigError):
            helpers.run(expression)


class TestUnaryFunctions:
    """Test negation, roots, factorial and absolute value."""

    @pytest.mark.parametrize("expression,expected", [
        ("neg(5)", TallyInteger(-5)),
        ("neg(2.5)", TallyFloat(-2.5)),
        ("neg(-9223372036854775808)", TallyFloat(9223372036854775808.0)),
        ("abs(-5)", TallyInteger(5)),
        ("abs(-2.5)", TallyFloat(2.5)),
        ("absolute(3)", TallyInteger(3)),
        ("abs(-9223372036854775808)", TallyFloat(9223372036854775808.0)),
    ])
    def test_sign_functions(self, helpers, expression, expected):
        """Test that neg and abs keep the literal's tag."""
        result = helpers.run(expression)
        assert result == expected
        assert type(result) is type(expected)

    @pytest.mark.parametrize("expression,expected", [
        ("sqrt(16)", TallyInteger(4)),
        ("sqrt(0)", TallyInteger(0)),
        ("sqrt(2)", TallyFloat(math.sqrt(2))),
        ("sqrt(0.25)", TallyFloat(0.5)),
        ("cbrt(27)", TallyInteger(3)),
        ("cbrt(-8)", TallyInteger(-2)),
        ("cuberoot(0)", TallyInteger(0)),
    ])
    def test_roots(self, helpers, expression, expected):
        """Test square and cube roots."""
        assert helpers.run(expression) == expected

    @pytest.mark.parametrize("expression", ["sqrt(-2)", "sqrt(-0.5)", "square_root(-1e-9)"])
    def test_negative_square_root(self, helpers, expression):
        """Test that negative square roots are rejected."""
        with pytest.raises(TallyInvalidSquareRootError):
            helpers.run(expression)

    @pytest.mark.parametrize("n,expected", [
        (0, 1),
        (1, 1),
        (5, 120),
        (10, 3628800),
        (20, 2432902008176640000),
    ])
    def test_factorial(self, helpers, n, expected):
        """Test factorial over its whole domain edge to edge."""
        assert helpers.run(f"fact({n})") == TallyInteger(expected)

    @pytest.mark.parametrize("expression", ["fact(21)", "fact(-1)", "factorial(2.5)", "fact(1e19)"])
    def test_invalid_factorial(self, helpers, expression):
        """Test arguments outside the integers 0 to 20."""
        with pytest.raises(TallyInvalidFactorialArgumentError):
            helpers.run(expression)


class TestLogarithms:
    """Test log, log2, log10 and ln."""

    @pytest.mark.parametrize("expression,expected", [
        ("log(8, 2)", TallyInteger(3)),
        ("log(1000, 10)", TallyInteger(3)),
        ("log(1, 5)", TallyInteger(0)),
        ("log(45, 0)", TallyInteger(0)),
        ("log(2, 0.0)", TallyInteger(0)),
        ("log2(8)", TallyInteger(3)),
        ("log2(0.5)", TallyInteger(-1)),
        ("log10(100)", TallyInteger(2)),
        ("ln(1)", TallyInteger(0)),
        ("ln(e)", TallyInteger(1)),
        ("ln(2)", TallyFloat(math.log(2))),
    ])
    def test_logarithms(self, helpers, expression, expected):
        """Test logarithm results, including a base of zero."""
        assert helpers.run(expression) == expected

    @pytest.mark.parametrize("expression", [
        "log(-1, 3)",
        "log(5, 1)",
        "log(0, 2)",
        "log(0, 10)",
        "log(8, -2)",
        "log2(0)",
        "log2(-4)",
        "log10(0)",
        "ln(0)",
        "ln(-1)",
    ])
    def test_invalid_logarithms(self, helpers, expression):
        """Test that logarithms outside their domain are rejected."""
        with pytest.raises(TallyResultTooBigError):
            helpers.run(expression)


class TestComparisons:
    """Test max and min."""

    @pytest.mark.parametrize("expression,expected", [
        ("max(1, 2)", TallyInteger(2)),
        ("max(2.5, 2)", TallyFloat(2.5)),
        ("maximum(3, 7)", TallyInteger(7)),
        ("min(-1, 0.5)", TallyInteger(-1)),
        ("minimum(0.25, 0.5)", TallyFloat(0.25)),
        ("max(2, 2)", TallyInteger(2)),
        ("min(-3, -3)", TallyInteger(-3)),
    ])
    def test_max_min(self, helpers, expression, expected):
        """Test that the winning operand is returned unchanged."""
        result = helpers.run(expression)
        assert result == expected
        assert type(result) is type(expected)

    def test_ties_return_left_operand(self, helpers):
        """Test that a tie between an integer and a large float keeps the left operand."""
        # 2**63 - 1 rounds to 2**63 when promoted to a float
        env = {"big": TallyFloat(2.0 ** 63)}
        assert helpers.run("max(9223372036854775807, big)", env) == TallyInteger(2 ** 63 - 1)
        assert helpers.run("max(big, 9223372036854775807)", env) == TallyFloat(2.0 ** 63)
        assert helpers.run("min(9223372036854775807, big)", env) == TallyInteger(2 ** 63 - 1)
        assert helpers.run("min(big, 9223372036854775807)", env) == TallyFloat(2.0 ** 63)
