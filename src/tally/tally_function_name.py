"""Function names recognized by Tally, with their arity and accepted spellings."""

from enum import Enum
from typing import Dict, List, Tuple


class TallyFunctionName(Enum):
    """
    The closed set of Tally functions.

    Each member's value is a tuple of (accepted names, arity).  The first accepted name
    is the canonical display name used when rendering an expression back to text.
    """
    ADD = (("add",), 2)
    SUBTRACT = (("sub", "subtract"), 2)
    MULTIPLY = (("mul", "multiply"), 2)
    DIVIDE = (("div", "divide"), 2)
    MODULUS = (("mod", "modulus"), 2)
    POWER = (("pow", "power"), 2)
    NEGATE = (("neg", "negate"), 1)

    SIN = (("sin",), 1)
    COS = (("cos",), 1)
    TAN = (("tan",), 1)
    SINH = (("sinh",), 1)
    COSH = (("cosh",), 1)
    TANH = (("tanh",), 1)
    ARC_SIN = (("asin", "arcsin"), 1)
    ARC_COS = (("acos", "arccos"), 1)
    ARC_TAN = (("atan", "arctan"), 1)
    ARC_SINH = (("asinh", "arcsinh"), 1)
    ARC_COSH = (("acosh", "arccosh"), 1)
    ARC_TANH = (("atanh", "arctanh"), 1)

    SQUARE_ROOT = (("sqrt", "squareroot", "square_root"), 1)
    CUBE_ROOT = (("cbrt", "cuberoot", "cube_root"), 1)
    FACTORIAL = (("fact", "factorial"), 1)
    LOG = (("log",), 2)
    LOG2 = (("log2",), 1)
    LOG10 = (("log10",), 1)
    LN = (("ln",), 1)
    ABS = (("abs", "absolute"), 1)

    CEIL = (("ceil", "ceiling"), 1)
    CEIL_PREC = (("ceilprec", "ceil_prec"), 2)
    FLOOR = (("floor",), 1)
    FLOOR_PREC = (("floorprec", "floor_prec"), 2)
    ROUND = (("round",), 1)
    ROUND_PREC = (("roundprec", "round_prec"), 2)
    TRUNC = (("trunc", "truncate"), 1)
    TRUNC_PREC = (("truncprec", "trunc_prec"), 2)

    MAX = (("max", "maximum"), 2)
    MIN = (("min", "minimum"), 2)

    @property
    def names(self) -> Tuple[str, ...]:
        """All accepted spellings, canonical first."""
        return self.value[0]

    @property
    def display_name(self) -> str:
        """Canonical name used when rendering."""
        return self.value[0][0]

    @property
    def num_arguments(self) -> int:
        """Declared arity."""
        return self.value[1]

    def with_precision(self) -> 'TallyFunctionName':
        """
        Return the precision variant used when a call supplies two arguments.

        Only ceil, floor and round are substituted.  Truncation with a precision has to
        be requested explicitly through truncprec.
        """
        return _PRECISION_VARIANTS.get(self, self)

    @classmethod
    def from_name(cls, name: str) -> 'TallyFunctionName | None':
        """Resolve a function name case-insensitively, returning None if unknown."""
        return _NAME_LOOKUP.get(name.lower())

    @classmethod
    def all_names(cls) -> List[str]:
        """Every accepted spelling, for error suggestions."""
        return sorted(_NAME_LOOKUP)

    def __str__(self) -> str:
        return self.display_name


_NAME_LOOKUP: Dict[str, TallyFunctionName] = {
    name: function for function in TallyFunctionName for name in function.names
}

_PRECISION_VARIANTS: Dict[TallyFunctionName, TallyFunctionName] = {
    TallyFunctionName.CEIL: TallyFunctionName.CEIL_PREC,
    TallyFunctionName.FLOOR: TallyFunctionName.FLOOR_PREC,
    TallyFunctionName.ROUND: TallyFunctionName.ROUND_PREC,
}
