"""Tally literal values - the Integer/Float tagged numeric type."""

import math
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any


EPSILON = sys.float_info.epsilon

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class TallyLiteral(ABC):
    """
    Abstract base class for Tally numeric literals.

    Literals are immutable.  Two literals are only ever equal when they carry the
    same tag: an integer never equals a float, even when the values match.
    """

    @abstractmethod
    def to_python(self) -> int | float:
        """Convert to Python value for operations."""

    @abstractmethod
    def type_name(self) -> str:
        """Return Tally type name for error messages."""

    @abstractmethod
    def describe(self) -> str:
        """Render the literal in its canonical display form."""

    @abstractmethod
    def negate(self) -> 'TallyLiteral':
        """Return the literal with its sign flipped, keeping its tag."""

    def as_float(self) -> float:
        """Promote the literal to a Python float."""
        return float(self.to_python())

    def is_integer(self) -> bool:
        """Check if this literal is an integer."""
        return isinstance(self, TallyInteger)

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True, eq=False)
class TallyInteger(TallyLiteral):
    """Represents 64-bit signed integer values."""
    value: int

    def to_python(self) -> int:
        return self.value

    def type_name(self) -> str:
        return "integer"

    def describe(self) -> str:
        return str(self.value)

    def negate(self) -> TallyLiteral:
        return integer_or_float(-self.value)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TallyInteger):
            return False

        return self.value == other.value

    def __hash__(self) -> int:
        return hash(("integer", self.value))

    def __repr__(self) -> str:
        return f"TallyInteger({self.value})"


@dataclass(frozen=True, eq=False)
class TallyFloat(TallyLiteral):
    """Represents 64-bit floating point values."""
    value: float

    def to_python(self) -> float:
        return self.value

    def type_name(self) -> str:
        return "float"

    def describe(self) -> str:
        return format_float(self.value)

    def negate(self) -> TallyLiteral:
        return TallyFloat(-self.value)

    def __eq__(self, other: Any) -> bool:
        """Floats compare equal when they differ by at most EPSILON."""
        if not isinstance(other, TallyFloat):
            return False

        return abs(self.value - other.value) <= EPSILON

    def __hash__(self) -> int:
        # Equality has a tolerance, so the hash cannot depend on the value
        return hash("float")

    def __repr__(self) -> str:
        return f"TallyFloat({self.value!r})"


def fits_int64(value: float | int) -> bool:
    """Check if a value lies within the 64-bit signed integer range."""
    return INT64_MIN <= value < 2 ** 63


def integer_or_float(value: int) -> TallyLiteral:
    """Wrap a Python int, promoting to float when it leaves the 64-bit range."""
    if INT64_MIN <= value <= INT64_MAX:
        return TallyInteger(value)

    return TallyFloat(float(value))


def literal_from_float(value: float) -> TallyLiteral:
    """
    Canonicalize a computed float.

    A float whose fractional part is smaller than EPSILON, and whose magnitude fits
    a 64-bit integer, becomes an integer.  Everything else stays a float.

    Args:
        value: The float to canonicalize

    Returns:
        TallyInteger or TallyFloat
    """
    if not math.isfinite(value) or not fits_int64(value):
        return TallyFloat(value)

    fract = math.modf(value)[0]
    if abs(fract) < EPSILON:
        return TallyInteger(int(value))

    return TallyFloat(value)


def canonicalize(literal: TallyLiteral) -> TallyLiteral:
    """Apply float canonicalization to an existing literal."""
    if isinstance(literal, TallyFloat):
        return literal_from_float(literal.value)

    return literal


def format_float(value: float) -> str:
    """
    Render a float in positional decimal notation.

    Uses the shortest digit string that round-trips, but never switches to
    exponent notation, so 1e-05 renders as 0.00001.
    """
    if not math.isfinite(value):
        return str(value)

    return format(Decimal(repr(value)), 'f')
