"""Arithmetic, logarithm and comparison functions for Tally."""

import math
import operator
from typing import Callable, Dict, List

from tally.tally_error import (
    TallyDivisionByZeroError, TallyInvalidFactorialArgumentError, TallyInvalidSquareRootError,
    TallyResultTooBigError
)
from tally.tally_function_name import TallyFunctionName
from tally.tally_numeric import call_float, ln, validate_and_wrap, wrap_finite
from tally.tally_value import TallyFloat, TallyInteger, TallyLiteral, canonicalize, integer_or_float


MAX_FACTORIAL_ARGUMENT = 20


class TallyMathFunctions:
    """Arithmetic, logarithm and comparison functions for Tally."""

    def get_functions(self) -> Dict[TallyFunctionName, Callable[[List[TallyLiteral]], TallyLiteral]]:
        """Return dictionary of mathematical function implementations."""
        return {
            # Arithmetic functions
            TallyFunctionName.ADD: self._builtin_add,
            TallyFunctionName.SUBTRACT: self._builtin_subtract,
            TallyFunctionName.MULTIPLY: self._builtin_multiply,
            TallyFunctionName.DIVIDE: self._builtin_divide,
            TallyFunctionName.MODULUS: self._builtin_modulus,
            TallyFunctionName.POWER: self._builtin_power,
            TallyFunctionName.NEGATE: self._builtin_negate,

            # Roots, factorial and absolute value
            TallyFunctionName.SQUARE_ROOT: self._builtin_square_root,
            TallyFunctionName.CUBE_ROOT: self._builtin_cube_root,
            TallyFunctionName.FACTORIAL: self._builtin_factorial,
            TallyFunctionName.ABS: self._builtin_abs,

            # Logarithms
            TallyFunctionName.LOG: self._builtin_log,
            TallyFunctionName.LOG2: self._builtin_log2,
            TallyFunctionName.LOG10: self._builtin_log10,
            TallyFunctionName.LN: self._builtin_ln,

            # Comparison functions
            TallyFunctionName.MAX: self._builtin_max,
            TallyFunctionName.MIN: self._builtin_min,
        }

    # Arithmetic operations
    def _builtin_add(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement add."""
        result = args[0].as_float() + args[1].as_float()
        return wrap_finite(result, TallyFunctionName.ADD, args)

    def _builtin_subtract(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement sub."""
        result = args[0].as_float() - args[1].as_float()
        return wrap_finite(result, TallyFunctionName.SUBTRACT, args)

    def _builtin_multiply(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement mul."""
        result = args[0].as_float() * args[1].as_float()
        return wrap_finite(result, TallyFunctionName.MULTIPLY, args)

    def _builtin_divide(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement div; a zero divisor is rejected before dividing."""
        divisor = args[1].as_float()
        if divisor == 0.0:
            raise TallyDivisionByZeroError()

        result = call_float(operator.truediv, args[0].as_float(), divisor)
        return wrap_finite(result, TallyFunctionName.DIVIDE, args)

    def _builtin_modulus(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement mod; the result takes the sign of the dividend."""
        divisor = args[1].as_float()
        if divisor == 0.0:
            raise TallyDivisionByZeroError()

        result = call_float(math.fmod, args[0].as_float(), divisor)
        return wrap_finite(result, TallyFunctionName.MODULUS, args)

    def _builtin_power(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement pow."""
        result = call_float(math.pow, args[0].as_float(), args[1].as_float())
        return validate_and_wrap(result, TallyFunctionName.POWER, args)

    def _builtin_negate(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement neg, preserving the integer or float tag."""
        return args[0].negate()

    # Roots, factorial and absolute value
    def _builtin_square_root(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement sqrt."""
        value = args[0].as_float()
        if value < 0:
            raise TallyInvalidSquareRootError(args[0])

        return validate_and_wrap(call_float(math.sqrt, value), TallyFunctionName.SQUARE_ROOT, args)

    def _builtin_cube_root(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement cbrt."""
        return validate_and_wrap(call_float(math.cbrt, args[0].as_float()), TallyFunctionName.CUBE_ROOT, args)

    def _builtin_factorial(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement fact for the integers 0 to 20, the range that fits 64 bits."""
        arg = args[0]
        if not isinstance(arg, TallyInteger) or not 0 <= arg.value <= MAX_FACTORIAL_ARGUMENT:
            raise TallyInvalidFactorialArgumentError(arg)

        result = 1
        for i in range(2, arg.value + 1):
            result *= i

        return TallyInteger(result)

    def _builtin_abs(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement abs, preserving the integer or float tag."""
        arg = args[0]
        if isinstance(arg, TallyInteger):
            return integer_or_float(abs(arg.value))

        return TallyFloat(abs(arg.value))

    # Logarithms
    def _builtin_log(self, args: List[TallyLiteral]) -> TallyLiteral:
        """
        Implement log(value, base).

        Bases of exactly 2 and 10 use the dedicated functions.  Any other base is
        computed as ln(value) / ln(base), so a base of zero gives a result of zero.
        """
        base = args[1].as_float()
        if base == 2.0:
            return self._builtin_log2(args[:1])

        if base == 10.0:
            return self._builtin_log10(args[:1])

        log_base = ln(base)
        if log_base == 0.0:
            raise TallyResultTooBigError(TallyFunctionName.LOG, args)

        result = ln(args[0].as_float()) / log_base
        return validate_and_wrap(result, TallyFunctionName.LOG, args)

    def _log_positive(
        self,
        func: Callable[[float], float],
        function: TallyFunctionName,
        args: List[TallyLiteral]
    ) -> TallyLiteral:
        value = args[0].as_float()
        if value <= 0:
            raise TallyResultTooBigError(function, args)

        return validate_and_wrap(call_float(func, value), function, args)

    def _builtin_log2(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement log2."""
        return self._log_positive(math.log2, TallyFunctionName.LOG2, args)

    def _builtin_log10(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement log10."""
        return self._log_positive(math.log10, TallyFunctionName.LOG10, args)

    def _builtin_ln(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement ln."""
        return self._log_positive(math.log, TallyFunctionName.LN, args)

    # Comparison functions
    def _builtin_max(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement max; a tie returns the left operand."""
        left, right = args
        winner = left if left.as_float() >= right.as_float() else right
        return canonicalize(winner)

    def _builtin_min(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement min; a tie returns the left operand."""
        left, right = args
        winner = left if left.as_float() <= right.as_float() else right
        return canonicalize(winner)
