"""Floating point helpers shared by the Tally operation library."""

import math
import sys
from typing import Callable, Sequence

from tally.tally_error import TallyResultTooBigError
from tally.tally_function_name import TallyFunctionName
from tally.tally_value import TallyLiteral, literal_from_float


def is_valid_result(value: float) -> bool:
    """Accept exactly zero or a normal float; reject NaN, infinities and subnormals."""
    if value == 0.0:
        return True

    return math.isfinite(value) and abs(value) >= sys.float_info.min


def validate_and_wrap(value: float, function: TallyFunctionName, args: Sequence[TallyLiteral]) -> TallyLiteral:
    """
    Canonicalize a computed float, rejecting unrepresentable results.

    Args:
        value: The computed result
        function: Function that produced it, for error reporting
        args: Arguments the function was applied to

    Returns:
        The canonicalized literal

    Raises:
        TallyResultTooBigError: If the result is NaN, infinite or subnormal
    """
    if not is_valid_result(value):
        raise TallyResultTooBigError(function, args)

    return literal_from_float(value)


def wrap_finite(value: float, function: TallyFunctionName, args: Sequence[TallyLiteral]) -> TallyLiteral:
    """Canonicalize a computed float, rejecting only NaN and infinities."""
    if not math.isfinite(value):
        raise TallyResultTooBigError(function, args)

    return literal_from_float(value)


def call_float(func: Callable[..., float], *values: float) -> float:
    """
    Call a math function with IEEE 754 style results.

    The math module raises where IEEE arithmetic produces a special value.  A domain
    error becomes NaN and an overflow becomes infinity, leaving the decision to the
    validator.
    """
    try:
        return func(*values)

    except ValueError:
        return math.nan

    except OverflowError:
        return math.inf


def ln(value: float) -> float:
    """Natural logarithm with ln(0) = -inf and ln(x < 0) = NaN."""
    if value == 0.0:
        return -math.inf

    if value < 0.0 or math.isnan(value):
        return math.nan

    return math.log(value)


def round_half_away_from_zero(value: float) -> float:
    """Round to the nearest integer, ties going away from zero."""
    if not math.isfinite(value):
        return value

    truncated = math.trunc(value)
    if abs(value - truncated) >= 0.5:
        truncated += 1 if value > 0 else -1

    return float(truncated)


def apply_float(op: Callable[[float], float | int], value: float) -> float:
    """Apply an integer-producing operation, leaving non-finite values untouched."""
    if not math.isfinite(value):
        return value

    return float(op(value))
