"""Precedence parser turning Tally token trees into expression trees."""

from typing import List

from tally.tally_ast import (
    TallyExprNode, TallyFunctionNode, TallyLiteralNode, TallyVariableNode, TallyVariableRefNode
)
from tally.tally_error import (
    TallyEmptyExpressionError, TallyInvalidExpressionError, TallyInvalidSignError,
    TallyInvalidVariableDefinitionError, TallyParseError, TallyUnknownFunctionNameError
)
from tally.tally_function_name import TallyFunctionName
from tally.tally_token import TallyOperator, TallyToken, TallyTokenTree, TallyTokenType


class TallyParser:
    """
    Builds expression trees from token trees.

    Each nesting level is scanned once, left to right, splitting it into an operand list
    and a binary operator list.  Unary signs are resolved during the scan.  The two lists
    are then collapsed into a tree by repeatedly splitting at the operator that binds
    most loosely.
    """

    def build(self, tree: TallyTokenTree, allow_variable_def: bool = True) -> TallyExprNode:
        """
        Build an expression from a token tree.

        Args:
            tree: Token tree for one nesting level
            allow_variable_def: Whether the level may start with a variable definition

        Returns:
            Root expression node

        Raises:
            TallyParseError: If the tokens do not form a valid expression
        """
        tokens = tree.tokens
        if tokens and tokens[0].type == TallyTokenType.VARIABLE_DEF and allow_variable_def:
            definition = tokens[0]
            inner = self._build_level(tokens[1:])
            return TallyVariableNode(definition.value, inner)

        return self._build_level(tokens)

    def _build_level(self, tokens: List[TallyToken]) -> TallyExprNode:
        operands: List[TallyExprNode] = []
        operators: List[TallyOperator] = []
        sign_position = True
        pending_negate = False

        for token in tokens:
            if token.type == TallyTokenType.VARIABLE_DEF:
                raise TallyInvalidVariableDefinitionError(token.value, token.position)

            if token.type == TallyTokenType.OPERATOR:
                op = token.value
                if not sign_position:
                    operators.append(op)
                    sign_position = True
                    continue

                if op is TallyOperator.MINUS:
                    pending_negate = not pending_negate
                    continue

                if op is TallyOperator.PLUS:
                    continue

                raise TallyInvalidSignError(op.value, token.position)

            operand = self._build_operand(token)
            if pending_negate:
                operand = self._negate(operand)
                pending_negate = False

            operands.append(operand)
            sign_position = False

        if not operands and not operators:
            raise TallyEmptyExpressionError(tokens[0].position if tokens else None)

        if len(operands) != len(operators) + 1:
            raise TallyInvalidExpressionError(operands, operators)

        return self._collapse(operands, operators)

    def _build_operand(self, token: TallyToken) -> TallyExprNode:
        """Build the expression for a single operand token."""
        if token.type == TallyTokenType.NUMBER:
            return TallyLiteralNode(token.value)

        if token.type == TallyTokenType.VARIABLE_REF:
            return TallyVariableRefNode(token.value)

        if token.type == TallyTokenType.GROUP:
            return self.build(token.children[0], allow_variable_def=False)

        if token.type == TallyTokenType.FUNCTION:
            function = TallyFunctionName.from_name(token.value)
            if function is None:
                raise TallyUnknownFunctionNameError(token.value, TallyFunctionName.all_names(), token.position)

            args = tuple(self.build(child, allow_variable_def=False) for child in token.children)
            if len(args) == 2:
                function = function.with_precision()

            return TallyFunctionNode(function, args)

        raise TallyParseError(f"Unexpected token: {token!r}", position=token.position)

    def _negate(self, operand: TallyExprNode) -> TallyExprNode:
        """Apply a unary minus; literals flip sign in place."""
        if isinstance(operand, TallyLiteralNode):
            return TallyLiteralNode(operand.literal.negate())

        return TallyFunctionNode(TallyFunctionName.NEGATE, (operand,))

    def _collapse(self, operands: List[TallyExprNode], operators: List[TallyOperator]) -> TallyExprNode:
        """
        Fold operands and operators into a binary tree, honoring precedence.

        Works left to right with a stack of pending operators.  Before an operator is
        pushed, every pending operator of the same or a higher band is applied, so each
        band is left-associative, power included, and the root is the last operator of
        the lowest band.  The fold is iterative, so the length of a chain is not limited
        by the interpreter's recursion limit.
        """
        output: List[TallyExprNode] = [operands[0]]
        pending: List[TallyOperator] = []

        for op, operand in zip(operators, operands[1:]):
            while pending and pending[-1].band >= op.band:
                self._reduce(output, pending.pop())

            pending.append(op)
            output.append(operand)

        while pending:
            self._reduce(output, pending.pop())

        return output[0]

    def _reduce(self, output: List[TallyExprNode], op: TallyOperator) -> None:
        right = output.pop()
        left = output.pop()
        output.append(TallyFunctionNode(op.function_name, (left, right)))
