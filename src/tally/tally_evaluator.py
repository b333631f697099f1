"""Evaluator for Tally expression trees."""

from typing import Callable, Dict, List

from tally.tally_ast import (
    TallyExprNode, TallyFunctionNode, TallyLiteralNode, TallyVariableNode, TallyVariableRefNode
)
from tally.tally_constants import is_reserved, lookup_constant
from tally.tally_error import (
    TallyEvalError, TallyFunctionArgumentCountError, TallyUnknownVariableError, TallyVariableNameTakenError
)
from tally.tally_function_name import TallyFunctionName
from tally.tally_math import TallyMathFunctions
from tally.tally_rounding import TallyRoundingFunctions
from tally.tally_trigonometry import TallyTrigonometryFunctions
from tally.tally_value import TallyLiteral


MAX_EVALUATION_DEPTH = 200


class TallyEvaluator:
    """Evaluates Tally expression trees against a variable environment."""

    def __init__(self, max_depth: int = MAX_EVALUATION_DEPTH) -> None:
        """
        Initialize evaluator.

        Args:
            max_depth: Maximum depth of nested function applications, counting each
                operator in a chain as one level
        """
        self.max_depth = max_depth
        self.math_functions = TallyMathFunctions()
        self.trigonometry_functions = TallyTrigonometryFunctions()
        self.rounding_functions = TallyRoundingFunctions()

        self._builtin_functions = self._create_builtin_functions()

    def _create_builtin_functions(self) -> Dict[TallyFunctionName, Callable[[List[TallyLiteral]], TallyLiteral]]:
        """Collect the implementations of every function."""
        builtins: Dict[TallyFunctionName, Callable[[List[TallyLiteral]], TallyLiteral]] = {}
        builtins.update(self.math_functions.get_functions())
        builtins.update(self.trigonometry_functions.get_functions())
        builtins.update(self.rounding_functions.get_functions())
        return builtins

    def evaluate(self, expr: TallyExprNode, env: Dict[str, TallyLiteral]) -> TallyLiteral:
        """
        Evaluate an expression.

        A variable definition at the root binds its value in env.  The binding is only
        made once the value has been computed, so a failing line never changes env.

        Args:
            expr: Root of the expression to evaluate
            env: Variable bindings, updated in place by definitions

        Returns:
            The resulting literal

        Raises:
            TallyEvalError: If evaluation fails
        """
        if isinstance(expr, TallyVariableNode):
            if is_reserved(expr.name):
                raise TallyVariableNameTakenError(expr.name)

            value = self._evaluate_expr(expr.expr, env, 0)
            env[expr.name] = value
            return value

        return self._evaluate_expr(expr, env, 0)

    def _evaluate_expr(self, expr: TallyExprNode, env: Dict[str, TallyLiteral], depth: int) -> TallyLiteral:
        if depth > self.max_depth:
            raise TallyEvalError(
                message=f"Expression too deeply nested (max depth: {self.max_depth})",
                context="Every operator in a chain and every function call adds a level",
                suggestion="Split the expression over several lines using variables",
                example="subtotal: 1 + 2 + 3\ntotal: subtotal + 4 + 5"
            )

        if isinstance(expr, TallyLiteralNode):
            return expr.literal

        if isinstance(expr, TallyVariableRefNode):
            return self._lookup(expr.name, env)

        if isinstance(expr, TallyFunctionNode):
            return self._call_function(expr, env, depth)

        if isinstance(expr, TallyVariableNode):
            raise TallyEvalError(
                message=f"Variable definition '{expr.name}' is only allowed at the start of a line",
                example="total: 1 + 2"
            )

        raise TallyEvalError(f"Cannot evaluate expression of type {type(expr).__name__}")

    def _lookup(self, name: str, env: Dict[str, TallyLiteral]) -> TallyLiteral:
        """Resolve a name, checking the reserved constants before env."""
        constant = lookup_constant(name)
        if constant is not None:
            return constant

        if name not in env:
            raise TallyUnknownVariableError(name, list(env))

        return env[name]

    def _call_function(self, expr: TallyFunctionNode, env: Dict[str, TallyLiteral], depth: int) -> TallyLiteral:
        function = expr.function
        if len(expr.args) != function.num_arguments:
            raise TallyFunctionArgumentCountError(function.display_name, function.num_arguments, len(expr.args))

        args = []
        for arg in expr.args:
            args.append(self._evaluate_expr(arg, env, depth + 1))

        return self._builtin_functions[function](args)
