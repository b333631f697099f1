"""Rounding functions for Tally: ceil, floor, round and trunc, with optional precision."""

import math
from typing import Callable, Dict, List

from tally.tally_error import TallyDivisionByZeroError, TallyInvalidTruncatePrecisionError, TallyResultTooBigError
from tally.tally_function_name import TallyFunctionName
from tally.tally_numeric import apply_float, call_float, round_half_away_from_zero, validate_and_wrap
from tally.tally_value import TallyFloat, TallyInteger, TallyLiteral, format_float


RoundingOp = Callable[[float], float]


def _ceil(value: float) -> float:
    return apply_float(math.ceil, value)


def _floor(value: float) -> float:
    return apply_float(math.floor, value)


def _trunc(value: float) -> float:
    return apply_float(math.trunc, value)


class TallyRoundingFunctions:
    """
    Rounding functions for Tally.

    The plain forms round a float to a whole number.  The precision forms take a second
    argument that is either an integer number of decimal places (which may be negative)
    or a float step, so that roundprec(3.14159, 0.25) rounds to the nearest quarter.
    Integers are always returned unchanged.
    """

    def get_functions(self) -> Dict[TallyFunctionName, Callable[[List[TallyLiteral]], TallyLiteral]]:
        """Return dictionary of rounding function implementations."""
        return {
            TallyFunctionName.CEIL: self._plain(_ceil, TallyFunctionName.CEIL),
            TallyFunctionName.FLOOR: self._plain(_floor, TallyFunctionName.FLOOR),
            TallyFunctionName.ROUND: self._plain(round_half_away_from_zero, TallyFunctionName.ROUND),
            TallyFunctionName.TRUNC: self._plain(_trunc, TallyFunctionName.TRUNC),

            TallyFunctionName.CEIL_PREC: self._precision(_ceil, TallyFunctionName.CEIL_PREC),
            TallyFunctionName.FLOOR_PREC: self._precision(_floor, TallyFunctionName.FLOOR_PREC),
            TallyFunctionName.ROUND_PREC: self._precision(round_half_away_from_zero, TallyFunctionName.ROUND_PREC),
            TallyFunctionName.TRUNC_PREC: self._builtin_trunc_prec,
        }

    def _plain(self, op: RoundingOp, function: TallyFunctionName) -> Callable[[List[TallyLiteral]], TallyLiteral]:
        def builtin(args: List[TallyLiteral]) -> TallyLiteral:
            value = args[0]
            if isinstance(value, TallyInteger):
                return value

            return validate_and_wrap(op(value.as_float()), function, args)

        return builtin

    def _precision(self, op: RoundingOp, function: TallyFunctionName) -> Callable[[List[TallyLiteral]], TallyLiteral]:
        def builtin(args: List[TallyLiteral]) -> TallyLiteral:
            return self._round_with_precision(op, function, args)

        return builtin

    def _builtin_trunc_prec(self, args: List[TallyLiteral]) -> TallyLiteral:
        """Implement truncprec; only a whole number of decimal places is accepted."""
        if isinstance(args[1], TallyFloat):
            raise TallyInvalidTruncatePrecisionError(args[1])

        return self._round_with_precision(_trunc, TallyFunctionName.TRUNC_PREC, args)

    def _round_with_precision(
        self,
        op: RoundingOp,
        function: TallyFunctionName,
        args: List[TallyLiteral]
    ) -> TallyLiteral:
        value, precision = args
        if isinstance(value, TallyInteger):
            return value

        number = value.as_float()
        if isinstance(precision, TallyInteger):
            multiplier = call_float(math.pow, 10.0, float(precision.value))
            if multiplier == 0.0 or math.isinf(multiplier):
                raise TallyResultTooBigError(function, args)

            result = op(number * multiplier) / multiplier
            return validate_and_wrap(result, function, args)

        step = precision.as_float()
        if step == 0.0:
            raise TallyDivisionByZeroError()

        return validate_and_wrap(self._round_to_step(op, number, step), function, args)

    def _round_to_step(self, op: RoundingOp, number: float, step: float) -> float:
        """
        Round to a multiple of step.

        The quotient is first rounded to as many decimal places as the step has
        characters, which clears representation noise such as 12.499999999999998
        before the operation sees it.
        """
        places = len(format_float(step))
        scale = call_float(math.pow, 10.0, float(places))
        quotient = number / step
        quotient = round_half_away_from_zero(quotient * scale) / scale
        return op(quotient) * step
