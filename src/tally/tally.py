"""Main Tally entry points: single-line parsing and evaluation, and multi-line sheets."""

import logging
from typing import Dict, Iterable, List

from tally.tally_ast import TallyExprNode
from tally.tally_error import TallyEmptyExpressionError, TallyError
from tally.tally_evaluator import TallyEvaluator
from tally.tally_lexer import TallyLexer
from tally.tally_parser import TallyParser
from tally.tally_value import TallyLiteral


ERROR_PLACEHOLDER = "Error"


def parse(text: str, max_depth: int = 100) -> TallyExprNode:
    """
    Parse one line of Tally text.

    Args:
        text: The line to parse
        max_depth: Maximum nesting depth of parentheses and function calls

    Returns:
        Root of the expression tree

    Raises:
        TallyTokenError: If the line cannot be tokenized
        TallyParseError: If the tokens do not form a valid expression
    """
    if not text.strip():
        raise TallyEmptyExpressionError()

    tree = TallyLexer(max_depth=max_depth).lex(text)
    return TallyParser().build(tree, allow_variable_def=True)


def evaluate(expr: TallyExprNode, env: Dict[str, TallyLiteral]) -> TallyLiteral:
    """
    Evaluate an expression tree.

    Args:
        expr: Root of the expression tree
        env: Variable bindings, updated in place when expr defines a variable

    Returns:
        The resulting literal

    Raises:
        TallyEvalError: If evaluation fails
    """
    return TallyEvaluator().evaluate(expr, env)


class TallySheet:
    """
    Evaluates a sheet of lines, one expression per line.

    Every call to evaluate_lines starts from an empty environment and works from top to
    bottom, so a line can read any variable defined above it.  A line that fails to
    parse or evaluate renders as "Error" and binds nothing, leaving the other lines
    unaffected.
    """

    def __init__(self, max_depth: int = 100):
        """
        Initialize a sheet.

        Args:
            max_depth: Maximum nesting depth of parentheses and function calls
        """
        self.max_depth = max_depth
        self._lexer = TallyLexer(max_depth=max_depth)
        self._parser = TallyParser()
        self._evaluator = TallyEvaluator()
        self._variables: Dict[str, TallyLiteral] = {}
        self._logger = logging.getLogger("TallySheet")

    @property
    def variables(self) -> Dict[str, TallyLiteral]:
        """Variables bound by the most recent evaluate_lines call."""
        return dict(self._variables)

    def evaluate_line(self, text: str, env: Dict[str, TallyLiteral]) -> TallyLiteral:
        """
        Parse and evaluate a single line against env.

        Raises:
            TallyError: If the line fails to parse or evaluate
        """
        if not text.strip():
            raise TallyEmptyExpressionError()

        tree = self._lexer.lex(text)
        expr = self._parser.build(tree, allow_variable_def=True)
        return self._evaluator.evaluate(expr, env)

    def evaluate_lines(self, lines: Iterable[str]) -> List[str]:
        """
        Evaluate every line in order and render the results.

        Args:
            lines: The sheet's lines

        Returns:
            One rendered result per line: the value, "Error", or "" for a blank line
        """
        env: Dict[str, TallyLiteral] = {}
        results = []
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                results.append("")
                continue

            try:
                value = self.evaluate_line(line, env)

            except TallyError as e:
                self._logger.debug("line %d: %r failed: %s", line_number, line, e.message)
                results.append(ERROR_PLACEHOLDER)
                continue

            self._logger.debug("line %d: %r => %s", line_number, line, value)
            results.append(str(value))

        self._variables = env
        return results
