"""Exception classes for Tally expressions with detailed context."""

import difflib
from typing import Any, List, Optional, Sequence


class TallyError(Exception):
    """Base exception for Tally errors with detailed context information."""

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        expected: Optional[str] = None,
        received: Optional[str] = None,
        suggestion: Optional[str] = None,
        example: Optional[str] = None,
        position: Optional[int] = None
    ):
        """
        Initialize detailed error.

        Args:
            message: Core error description
            context: Additional context information
            expected: What was expected
            received: What was actually received
            suggestion: Suggestion for fixing the error
            example: Example of correct usage
            position: Character position where error occurred
        """
        self.message = message
        self.context = context
        self.expected = expected
        self.received = received
        self.suggestion = suggestion
        self.example = example
        self.position = position

        super().__init__(self._format_detailed_message())

    def _format_detailed_message(self) -> str:
        """Format the error message with all available details."""
        parts = [f"Error: {self.message}"]

        if self.position is not None:
            parts.append(f"Position: {self.position}")

        if self.received:
            parts.append(f"Received: {self.received}")

        if self.expected:
            parts.append(f"Expected: {self.expected}")

        if self.context:
            parts.append(f"Context: {self.context}")

        if self.suggestion:
            parts.append(f"Suggestion: {self.suggestion}")

        if self.example:
            parts.append(f"Example: {self.example}")

        return "\n".join(parts)


class TallyTokenError(TallyError):
    """Tokenization errors with detailed context."""


class TallyParseError(TallyError):
    """Parsing errors with detailed context."""


class TallyEvalError(TallyError):
    """Evaluation errors with detailed context."""


class TallyEmptyExpressionError(TallyParseError):
    """Raised when a line or group contains neither operands nor operators."""

    def __init__(self, position: Optional[int] = None):
        super().__init__(
            message="Empty expression",
            position=position,
            expected="A number, variable, function call or parenthesized expression",
            example="1 + 2, sqrt(16), (3 * 4)"
        )


class TallyInvalidExpressionError(TallyParseError):
    """Raised when operands and binary operators do not alternate."""

    def __init__(self, expressions: Sequence[Any], operators: Sequence[Any]):
        self.expressions = list(expressions)
        self.operators = list(operators)
        operator_text = " ".join(str(op) for op in self.operators) or "none"
        super().__init__(
            message="Invalid expression",
            received=f"{len(self.expressions)} operand(s) and {len(self.operators)} operator(s): {operator_text}",
            expected="Exactly one more operand than binary operators",
            suggestion="Check for a missing operand or operator",
            example="Correct: 2 * (3 + 4)\nIncorrect: 2 (3 + 4), 2 *"
        )


class TallyInvalidSignError(TallyParseError):
    """Raised when an operator other than + or - appears where a sign is expected."""

    def __init__(self, sign: str, position: Optional[int] = None):
        self.sign = sign
        super().__init__(
            message=f"Invalid sign: {sign}",
            position=position,
            received=f"Operator '{sign}' where an operand or sign was expected",
            expected="An operand, optionally preceded by + or -",
            example="Correct: 5 * -10\nIncorrect: 5 + * 10"
        )


class TallyUnknownFunctionNameError(TallyParseError):
    """Raised when a function call names no known function."""

    def __init__(self, name: str, available: Optional[List[str]] = None, position: Optional[int] = None):
        self.name = name
        suggestion = None
        if available:
            matches = difflib.get_close_matches(name.lower(), available, n=3, cutoff=0.6)
            if matches:
                suggestion = f"Did you mean: {', '.join(matches)}?"

        super().__init__(
            message=f"Unknown function: {name}",
            position=position,
            suggestion=suggestion,
            example="sqrt(16), max(1, 2), round(3.14159, 2)"
        )


class TallyInvalidVariableDefinitionError(TallyParseError):
    """Raised when a variable definition is not the first token of a line."""

    def __init__(self, name: str, position: Optional[int] = None):
        self.name = name
        super().__init__(
            message=f"Invalid variable definition: {name}",
            position=position,
            context="A variable can only be defined at the start of a line, outside any parentheses",
            example="Correct: total: 1 + 2\nIncorrect: 1 + (total: 2)"
        )


class TallyUnknownVariableError(TallyEvalError):
    """Raised when a variable reference has no binding."""

    def __init__(self, name: str, available: Optional[List[str]] = None):
        self.name = name
        context = None
        if available:
            context = "Available variables: " + ", ".join(f"'{n}'" for n in sorted(available))

        super().__init__(
            message=f"Unknown variable: '{name}'",
            context=context,
            suggestion="Define the variable on an earlier line, e.g. 'name: 42'"
        )


class TallyVariableNameTakenError(TallyEvalError):
    """Raised when a definition targets a reserved constant name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            message=f"Variable name is reserved: '{name}'",
            context="pi, tau and e are built-in constants and cannot be redefined",
            suggestion="Choose a different variable name"
        )


class TallyFunctionArgumentCountError(TallyEvalError):
    """Raised when a function is called with the wrong number of arguments."""

    def __init__(self, name: str, expected: int, supplied: int):
        self.name = name
        self.expected_count = expected
        self.supplied_count = supplied
        super().__init__(
            message=f"Function '{name}' takes {expected} argument(s), {supplied} supplied",
            expected=f"{expected} argument(s)",
            received=f"{supplied} argument(s)"
        )


class TallyResultTooBigError(TallyEvalError):
    """Raised when a computed result is NaN, infinite or subnormal."""

    def __init__(self, function_name: Any, args: Sequence[Any]):
        self.function_name = function_name
        self.args_list = list(args)
        arg_text = ", ".join(str(a) for a in self.args_list)
        super().__init__(
            message=f"Result of {function_name}({arg_text}) cannot be represented",
            context="The result is undefined, infinite or too close to zero"
        )


class TallyInvalidFactorialArgumentError(TallyEvalError):
    """Raised when factorial is applied outside the integers 0 to 20."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            message=f"Invalid factorial argument: {value}",
            expected="An integer between 0 and 20",
            received=str(value)
        )


class TallyInvalidSquareRootError(TallyEvalError):
    """Raised when taking the square root of a negative number."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            message=f"Cannot take the square root of {value}",
            expected="A non-negative number",
            received=str(value)
        )


class TallyDivisionByZeroError(TallyEvalError):
    """Raised when dividing or taking a modulus by zero."""

    def __init__(self) -> None:
        super().__init__(message="Division by zero")


class TallyInvalidTruncatePrecisionError(TallyEvalError):
    """Raised when truncating to a fractional step instead of a decimal count."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            message=f"Invalid truncate precision: {value}",
            expected="An integer number of decimal places",
            received=str(value),
            example="truncprec(3.14159, 2) -> 3.14"
        )
