"""Tally expression tree.

Expressions are immutable.  Every node renders back to Tally source with describe(),
and binary operators always render as function calls, so the rendered text never
depends on operator precedence:

    1 + 2 * 3   ->   add(1, mul(2, 3))
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from tally.tally_function_name import TallyFunctionName
from tally.tally_value import TallyLiteral


@dataclass(frozen=True)
class TallyExprNode(ABC):
    """Abstract base class for all Tally expression nodes."""

    @abstractmethod
    def describe(self) -> str:
        """Render the expression as Tally source."""

    def __str__(self) -> str:
        return self.describe()


@dataclass(frozen=True)
class TallyLiteralNode(TallyExprNode):
    """A numeric literal."""
    literal: TallyLiteral

    def describe(self) -> str:
        return self.literal.describe()


@dataclass(frozen=True)
class TallyVariableNode(TallyExprNode):
    """A variable definition; only ever the root of a line."""
    name: str
    expr: TallyExprNode

    def describe(self) -> str:
        return f"{self.name}: {self.expr.describe()}"


@dataclass(frozen=True)
class TallyVariableRefNode(TallyExprNode):
    """A reference to a variable or a reserved constant."""
    name: str

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class TallyFunctionNode(TallyExprNode):
    """A function application, including applications of binary operators."""
    function: TallyFunctionName
    args: Tuple[TallyExprNode, ...]

    def describe(self) -> str:
        arg_text = ", ".join(arg.describe() for arg in self.args)
        return f"{self.function.display_name}({arg_text})"
