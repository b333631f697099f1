"""Trigonometric and hyperbolic functions for Tally."""

import math
from typing import Callable, Dict, List

from tally.tally_function_name import TallyFunctionName
from tally.tally_numeric import call_float, validate_and_wrap
from tally.tally_value import TallyLiteral


_TRIG_FUNCTIONS: Dict[TallyFunctionName, Callable[[float], float]] = {
    TallyFunctionName.SIN: math.sin,
    TallyFunctionName.COS: math.cos,
    TallyFunctionName.TAN: math.tan,
    TallyFunctionName.SINH: math.sinh,
    TallyFunctionName.COSH: math.cosh,
    TallyFunctionName.TANH: math.tanh,
    TallyFunctionName.ARC_SIN: math.asin,
    TallyFunctionName.ARC_COS: math.acos,
    TallyFunctionName.ARC_TAN: math.atan,
    TallyFunctionName.ARC_SINH: math.asinh,
    TallyFunctionName.ARC_COSH: math.acosh,
    TallyFunctionName.ARC_TANH: math.atanh,
}


class TallyTrigonometryFunctions:
    """Trigonometric functions, all working in radians."""

    def get_functions(self) -> Dict[TallyFunctionName, Callable[[List[TallyLiteral]], TallyLiteral]]:
        """Return dictionary of trigonometric function implementations."""
        return {function: self._make_builtin(function, func) for function, func in _TRIG_FUNCTIONS.items()}

    def _make_builtin(
        self,
        function: TallyFunctionName,
        func: Callable[[float], float]
    ) -> Callable[[List[TallyLiteral]], TallyLiteral]:
        """Wrap a float function so that domain errors and overflows are rejected."""
        def builtin(args: List[TallyLiteral]) -> TallyLiteral:
            return validate_and_wrap(call_float(func, args[0].as_float()), function, args)

        return builtin
