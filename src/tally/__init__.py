"""Tally line-oriented calculator language package."""

# Main API
from tally.tally import parse, evaluate, TallySheet, ERROR_PLACEHOLDER

# Exceptions
from tally.tally_error import (
    TallyError, TallyTokenError, TallyParseError, TallyEvalError,
    TallyEmptyExpressionError, TallyInvalidExpressionError, TallyInvalidSignError,
    TallyUnknownFunctionNameError, TallyInvalidVariableDefinitionError,
    TallyUnknownVariableError, TallyVariableNameTakenError, TallyFunctionArgumentCountError,
    TallyResultTooBigError, TallyInvalidFactorialArgumentError, TallyInvalidSquareRootError,
    TallyDivisionByZeroError, TallyInvalidTruncatePrecisionError
)

# Value types
from tally.tally_value import TallyLiteral, TallyInteger, TallyFloat, EPSILON, literal_from_float
from tally.tally_function_name import TallyFunctionName

# Expression tree
from tally.tally_ast import (
    TallyExprNode, TallyLiteralNode, TallyVariableNode, TallyVariableRefNode, TallyFunctionNode
)

# Lower-level components (for advanced usage)
from tally.tally_token import TallyToken, TallyTokenType, TallyTokenTree, TallyOperator
from tally.tally_lexer import TallyLexer
from tally.tally_parser import TallyParser
from tally.tally_evaluator import TallyEvaluator


__all__ = [
    # Main API
    "parse", "evaluate", "TallySheet", "ERROR_PLACEHOLDER",

    # Exceptions
    "TallyError", "TallyTokenError", "TallyParseError", "TallyEvalError",
    "TallyEmptyExpressionError", "TallyInvalidExpressionError", "TallyInvalidSignError",
    "TallyUnknownFunctionNameError", "TallyInvalidVariableDefinitionError",
    "TallyUnknownVariableError", "TallyVariableNameTakenError", "TallyFunctionArgumentCountError",
    "TallyResultTooBigError", "TallyInvalidFactorialArgumentError", "TallyInvalidSquareRootError",
    "TallyDivisionByZeroError", "TallyInvalidTruncatePrecisionError",

    # Value types
    "TallyLiteral", "TallyInteger", "TallyFloat", "EPSILON", "literal_from_float", "TallyFunctionName",

    # Expression tree
    "TallyExprNode", "TallyLiteralNode", "TallyVariableNode", "TallyVariableRefNode", "TallyFunctionNode",

    # Lower-level components
    "TallyToken", "TallyTokenType", "TallyTokenTree", "TallyOperator", "TallyLexer", "TallyParser",
    "TallyEvaluator"
]
